from __future__ import annotations


class StoreError(Exception):
    """Base class for credential store failures the caller is expected to handle."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserAlreadyExists(StoreError):
    """Raised when a username is already taken."""


class UserNotFound(StoreError):
    """Raised when a mutation targets a username with no record."""


__all__ = ["StoreError", "UserAlreadyExists", "UserNotFound"]
