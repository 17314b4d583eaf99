from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries a stable ``code`` that is surfaced to API callers.
    """

    code = "domain-error"

    def __init__(self, message: str = "", *, code: Optional[str] = None):
        if code:
            self.code = code
        super().__init__(message or self.code)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "invalid-input"


class AuthenticationError(DomainError):
    """Raised when login credentials or the caller identity are invalid."""

    code = "unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action.

    ``reason`` is one of ``principal-only``, ``staff-only``, ``no-department``
    or ``cross-department``.
    """

    _MESSAGES = {
        "principal-only": "Only the principal can perform this action",
        "staff-only": "Only staff can perform this action",
        "no-department": "No department set",
        "cross-department": "Cannot act on another department",
    }

    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or self._MESSAGES.get(reason, reason), code=reason)

    @property
    def reason(self) -> str:
        return self.code


class NotFoundError(DomainError):
    """Raised when a roster, record or account is absent where required."""

    code = "not-found"


class PastDateLockedError(DomainError):
    """Raised when attendance for a day before today is modified."""

    code = "past-date-locked"
