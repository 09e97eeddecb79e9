"""
Persistence layer: SQLAlchemy models and the CredentialStore that owns the session.

The store is constructed by the application factory from configuration;
there is no module-level storage instance.
"""
from models.base_model import Base
from models.user import User
from models.refresh_token import RefreshToken
from models.errors import StoreError, UserAlreadyExists, UserNotFound
from models.credential_store import CredentialStore

__all__ = [
    "Base",
    "User",
    "RefreshToken",
    "StoreError",
    "UserAlreadyExists",
    "UserNotFound",
    "CredentialStore",
]
