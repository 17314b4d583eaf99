from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from src.school_portal.school_portal.access.policy import PrincipalCaller, StaffCaller
from src.school_portal.school_portal.container import assemble
from src.school_portal.school_portal.core.enums import Role
from src.school_portal.school_portal.main import create_app
from tests.fakes import FakeImageStore, InMemoryAttendance, InMemoryNews, InMemoryRosters, InMemoryUsers

TODAY = date(2025, 1, 1)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def principal() -> PrincipalCaller:
    return PrincipalCaller(user_id=1)


@pytest.fixture
def cse_staff() -> StaffCaller:
    return StaffCaller(user_id=2, department="CSE")


@pytest.fixture
def ece_staff() -> StaffCaller:
    return StaffCaller(user_id=3, department="ECE")


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.add(
        name="Principal",
        email="principal@school.test",
        password_hash=generate_password_hash("Principal123"),
        role=Role.PRINCIPAL,
        department=None,
    )
    repo.add(
        name="Asha",
        email="asha@school.test",
        password_hash=generate_password_hash("staff-pass"),
        role=Role.STAFF,
        department="CSE",
    )
    repo.add(
        name="Ravi",
        email="ravi@school.test",
        password_hash=generate_password_hash("staff-pass"),
        role=Role.STAFF,
        department="ECE",
    )
    return repo


@pytest.fixture
def container(users_repo, today):
    return assemble(
        users_repo=users_repo,
        rosters_repo=InMemoryRosters(),
        attendance_repo=InMemoryAttendance(),
        news_repo=InMemoryNews(),
        image_store=FakeImageStore(),
        clock=lambda: today,
    )


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Log in and return ready-to-use ``Authorization`` headers."""

    def _login(email: str, password: str) -> dict:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _login
