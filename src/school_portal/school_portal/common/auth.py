from __future__ import annotations

from functools import wraps

from flask import g
from flask_jwt_extended import create_access_token, get_jwt_identity, verify_jwt_in_request

from ..access.policy import Caller, caller_from_identity
from ..users.model import Identity
from ..users.service import AuthService


def issue_token(identity: Identity) -> str:
    return create_access_token(
        identity=str(identity.user_id),
        additional_claims={"role": identity.role.value, "dept": identity.department},
    )


def caller_required(auth_service: AuthService):
    """Verify the bearer token and expose the resolved caller as ``g.caller``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            identity = auth_service.resolve(int(get_jwt_identity()))
            g.caller = caller_from_identity(identity)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_caller() -> Caller:
    return g.caller
