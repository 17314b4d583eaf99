from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassRoster, Student


class RosterRepository(Protocol):
    def get(self, *, department: str, class_code: str) -> Optional[ClassRoster]:
        raise NotImplementedError

    def replace(
        self,
        *,
        department: str,
        class_code: str,
        display_name: str,
        students: Sequence[Student],
    ) -> ClassRoster:
        """Create or fully replace a roster (no merge with the previous list)."""

        raise NotImplementedError

    def list_for_department(self, *, department: str) -> Sequence[ClassRoster]:
        """Rosters of one department ordered by class code ascending."""

        raise NotImplementedError

    def list_departments(self) -> Sequence[str]:
        """Distinct departments that own at least one roster, sorted."""

        raise NotImplementedError
