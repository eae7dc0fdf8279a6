from .auth import AuthenticatedUser, get_current_user, require_admin, require_auth
from .correlation import CorrelationIdMiddleware

__all__ = [
    "AuthenticatedUser",
    "CorrelationIdMiddleware",
    "get_current_user",
    "require_admin",
    "require_auth",
]
