"""
Auth Domain - session lookup against the external auth service.

Sign-in, sign-up and social providers are owned by the auth service; this
domain only resolves the session cookie into a SessionUser and guards routes.
"""

from .decorators import login_required
from .exceptions import AuthError, AuthServiceUnavailableError, UnauthorizedError
from .models import SessionUser

__all__ = [
    "login_required",
    "AuthError",
    "AuthServiceUnavailableError",
    "UnauthorizedError",
    "SessionUser",
]
