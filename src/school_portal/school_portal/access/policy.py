"""Access control decisions.

Pure functions: given the caller and the department being acted upon, decide
allow/deny. Services call :func:`enforce` before touching any store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import Identity


@dataclass(frozen=True)
class PrincipalCaller:
    user_id: int

    @property
    def role(self) -> Role:
        return Role.PRINCIPAL


@dataclass(frozen=True)
class StaffCaller:
    """A staff caller always carries its department."""

    user_id: int
    department: str

    @property
    def role(self) -> Role:
        return Role.STAFF


Caller = Union[PrincipalCaller, StaffCaller]


class Scope(str, Enum):
    PRINCIPAL_ONLY = "principal-only"
    STAFF_ONLY = "staff-only"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(allowed=True)


def deny(reason: str) -> Decision:
    return Decision(allowed=False, reason=reason)


def decide(caller: Caller, scope: Scope, *, department: Optional[str] = None) -> Decision:
    """Apply the role rule for ``scope`` and, for staff scopes, the department rule.

    ``department`` is the target department; when omitted for a staff scope the
    caller's own department is the target.
    """

    if scope == Scope.PRINCIPAL_ONLY:
        if not isinstance(caller, PrincipalCaller):
            return deny("principal-only")
        return ALLOW

    if not isinstance(caller, StaffCaller):
        return deny("staff-only")

    if not caller.department:
        return deny("no-department")
    if department is not None and department != caller.department:
        return deny("cross-department")
    return ALLOW


def enforce(caller: Caller, scope: Scope, *, department: Optional[str] = None) -> None:
    decision = decide(caller, scope, department=department)
    if not decision.allowed:
        raise AuthorizationError(decision.reason or "forbidden")


def require_staff(caller: Caller, *, department: Optional[str] = None) -> StaffCaller:
    """Enforce a staff scope and hand back the caller as a ``StaffCaller``."""

    enforce(caller, Scope.STAFF_ONLY, department=department)
    if not isinstance(caller, StaffCaller):
        raise AuthorizationError("staff-only")
    return caller


def caller_from_identity(identity: Identity) -> Caller:
    if identity.role == Role.PRINCIPAL:
        return PrincipalCaller(user_id=identity.user_id)

    if not identity.department:
        raise AuthorizationError("no-department")
    return StaffCaller(user_id=identity.user_id, department=identity.department)
