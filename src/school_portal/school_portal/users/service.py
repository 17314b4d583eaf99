from __future__ import annotations

import logging
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.policy import Caller, Scope, enforce
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import Identity
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an account and resolve token identities."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> Identity:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")
        return user

    def resolve(self, user_id: int) -> Identity:
        """Load the account behind a verified token; deleted accounts are rejected."""

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("User not found")
        return user


class StaffService:
    """Use case: manage staff accounts (principal only)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_staff(
        self,
        caller: Caller,
        *,
        name: str,
        email: str,
        password: str,
        department: str,
    ) -> Identity:
        enforce(caller, Scope.PRINCIPAL_ONLY)

        name = require_non_empty(name, "name")
        email = require_non_empty(email, "email").lower()
        password = require_non_empty(password, "password")
        department = require_non_empty(department, "dept")
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email already exists", code="email-exists")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.STAFF,
            department=department,
        )
        logger.info("Staff %s created in %s by user %s", user_id, department, caller.user_id)

        created = self._users.get_by_id(user_id)
        if not created:
            raise RuntimeError(f"Staff {user_id} missing right after insert")
        return created

    def list_staff(self, caller: Caller) -> Sequence[Identity]:
        enforce(caller, Scope.PRINCIPAL_ONLY)
        return self._users.list_all()

    def delete_staff(self, caller: Caller, user_id: int) -> None:
        enforce(caller, Scope.PRINCIPAL_ONLY)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Staff not found")
        if user.role == Role.PRINCIPAL:
            raise ValidationError("The principal account cannot be deleted")

        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("Staff not found")
        logger.info("Staff %s deleted by user %s", user.user_id, caller.user_id)


def ensure_principal(users: UserRepository, *, name: str, email: str, password: str) -> tuple[Identity, bool]:
    """One-time bootstrap of the principal account.

    Returns ``(identity, created)``; an existing account with the same email is
    left untouched.
    """

    email = require_non_empty(email, "email").lower()
    existing = users.get_by_email(email)
    if existing:
        return existing, False

    require_min_length(password, "password", MIN_PASSWORD_LENGTH)
    user_id = users.create_user(
        name=require_non_empty(name, "name"),
        email=email,
        password_hash=generate_password_hash(password),
        role=Role.PRINCIPAL,
        department=None,
    )
    logger.info("Principal account %s created", email)

    created = users.get_by_id(user_id)
    if not created:
        raise RuntimeError(f"Principal {user_id} missing right after insert")
    return created, True
