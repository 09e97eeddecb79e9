from services.auth_session import AuthSessionService, TokenPair
from services.authorization import AuthorizationGate
from services.errors import AuthError, BadRequest, Conflict, Forbidden, Internal, Unauthorized

__all__ = [
    "AuthSessionService",
    "TokenPair",
    "AuthorizationGate",
    "AuthError",
    "BadRequest",
    "Conflict",
    "Forbidden",
    "Internal",
    "Unauthorized",
]
