from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base class for auth failures mapped to HTTP responses.

    Each subclass fixes an HTTP status_code and a stable error_code:
    - BAD_REQUEST (400)
    - UNAUTHORIZED (401)
    - FORBIDDEN (403)
    - CONFLICT (409)
    - INTERNAL_ERROR (500)
    """

    status_code: int = 400
    error_code: str = "BAD_REQUEST"
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(AuthError):
    """Malformed or incomplete input (400)."""
    status_code = 400
    error_code = "BAD_REQUEST"
    default_message = "Bad request"


class Unauthorized(AuthError):
    """Credential missing or rejected at login (401)."""
    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class Forbidden(AuthError):
    """Presented credential is invalid, expired or revoked (403)."""
    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "Forbidden"


class Conflict(AuthError):
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Conflict"


class Internal(AuthError):
    """Store or hashing failure. Never carries the underlying detail."""
    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"


__all__ = ["AuthError", "BadRequest", "Unauthorized", "Forbidden", "Conflict", "Internal"]
