from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLRosterRepository
from .classes.repository import RosterRepository
from .classes.service import RosterService
from .database.connection import DBConfig, DatabaseConnection
from .news.mysql_news_repository import MySQLNewsRepository
from .news.repository import NewsRepository
from .news.service import NewsService
from .news.storage import ImageStore, LocalImageStore
from .reports.service import SummaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, StaffService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    rosters_repo: RosterRepository
    attendance_repo: AttendanceRepository
    news_repo: NewsRepository
    image_store: Optional[ImageStore]

    auth_service: AuthService
    staff_service: StaffService
    roster_service: RosterService
    attendance_service: AttendanceService
    summary_service: SummaryService
    news_service: NewsService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    users_repo: UserRepository,
    rosters_repo: RosterRepository,
    attendance_repo: AttendanceRepository,
    news_repo: NewsRepository,
    image_store: Optional[ImageStore] = None,
    clock: Optional[Callable[[], date]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementations."""

    return Container(
        users_repo=users_repo,
        rosters_repo=rosters_repo,
        attendance_repo=attendance_repo,
        news_repo=news_repo,
        image_store=image_store,
        auth_service=AuthService(users_repo),
        staff_service=StaffService(users_repo),
        roster_service=RosterService(rosters_repo),
        attendance_service=AttendanceService(attendance_repo, rosters_repo, clock=clock),
        summary_service=SummaryService(attendance_repo),
        news_service=NewsService(news_repo, image_store),
        conn=conn,
    )


def build_container(*, db_config: dict, upload_folder: str | Path) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        rosters_repo=MySQLRosterRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        news_repo=MySQLNewsRepository(conn),
        image_store=LocalImageStore(upload_folder),
        conn=conn,
    )
