"""
AuthSessionService: registration, login, access-token refresh and logout.

Login appends one refresh token to the user's stored set; refresh only mints
a new access token and leaves that set untouched; logout removes a token and
always reports success.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import logging

from argon2.exceptions import HashingError
from sqlalchemy.exc import SQLAlchemyError

from models.credential_store import CredentialStore
from models.errors import UserAlreadyExists
from models.user import User
from services.errors import BadRequest, Conflict, Forbidden, Internal, Unauthorized
from utils.security import hash_password, verify_password
from utils.tokens import TokenDomain, TokenIssuer, VerifyOutcome

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
INVALID_REFRESH_TOKEN = "Invalid refresh token"

# verified against when the username is unknown, so both login failures cost one argon2 verify
_DUMMY_PASSWORD_HASH = hash_password("token-auth-dummy-password")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@contextmanager
def _internal_errors(operation: str):
    """Surface store and hashing failures as Internal, logging the cause."""
    try:
        yield
    except (SQLAlchemyError, HashingError) as exc:
        logger.exception("%s failed", operation)
        raise Internal() from exc


class AuthSessionService:
    def __init__(self, store: CredentialStore, issuer: TokenIssuer):
        self.store = store
        self.issuer = issuer

    def register(self, username, password) -> User:
        if not username or not password:
            raise BadRequest("Username and password are required")

        with _internal_errors("registration"):
            if self.store.find_by_username(username) is not None:
                raise Conflict("User already exists")
            user = User(username=username, password_hash=hash_password(password))
            try:
                self.store.create(user)
            except UserAlreadyExists as exc:
                # lost a race with a concurrent registration
                raise Conflict("User already exists") from exc

        logger.info("registered user %s", username)
        return user

    def login(self, username, password) -> TokenPair:
        # unknown user and wrong password must be indistinguishable to the caller
        if not username or not password:
            raise Unauthorized(INVALID_CREDENTIALS)

        with _internal_errors("login"):
            user = self.store.find_by_username(username)
            if user is None:
                verify_password(password, _DUMMY_PASSWORD_HASH)
            if user is None or not verify_password(password, user.password_hash):
                logger.info("failed login for %s", username)
                raise Unauthorized(INVALID_CREDENTIALS)

            access_token = self.issuer.issue_access(user.username)
            refresh_token = self.issuer.issue_refresh(user.username)
            self.store.append_refresh_token(
                user.username, refresh_token, expires_at=self.issuer.expires_at(refresh_token)
            )

        logger.info("user %s logged in", username)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def refresh(self, refresh_token) -> str:
        if refresh_token is None:
            raise Unauthorized()

        with _internal_errors("token refresh"):
            owner = self.store.find_by_refresh_token(refresh_token)
        if owner is None:
            logger.info("refresh rejected: token not on record")
            raise Forbidden(INVALID_REFRESH_TOKEN)

        claims, outcome = self.issuer.verify(TokenDomain.REFRESH, refresh_token)
        if outcome is not VerifyOutcome.VALID:
            logger.info("refresh rejected: token %s", outcome.value)
            raise Forbidden(INVALID_REFRESH_TOKEN)
        if claims.name != owner.username:
            logger.warning("refresh rejected: claims do not match stored owner %s", owner.username)
            raise Forbidden(INVALID_REFRESH_TOKEN)

        return self.issuer.issue_access(claims.name)

    def logout(self, refresh_token) -> None:
        """Revoke the refresh token if it is stored. Unknown tokens are not an error."""
        with _internal_errors("logout"):
            removed = self.store.remove_refresh_token(refresh_token)
        logger.info("logout removed %d refresh token(s)", removed)
