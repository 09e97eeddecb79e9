"""
AuthorizationGate: stateless access-token check for protected handlers.

Only the signature and expiry are consulted; the credential store is never
touched, so revoking a refresh token does not cut off access tokens already
handed out until they expire on their own.
"""
from __future__ import annotations

from services.errors import Forbidden, Unauthorized
from utils.tokens import TokenClaims, TokenDomain, TokenIssuer, VerifyOutcome

TOKEN_REQUIRED = "Authentication token required"
TOKEN_EXPIRED = "Token expired"
TOKEN_INVALID = "Token is not valid"


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    parts = authorization.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


class AuthorizationGate:
    def __init__(self, issuer: TokenIssuer):
        self.issuer = issuer

    def authorize(self, authorization: str | None) -> TokenClaims:
        token = bearer_token(authorization)
        if token is None:
            raise Unauthorized(TOKEN_REQUIRED)

        claims, outcome = self.issuer.verify(TokenDomain.ACCESS, token)
        if outcome is VerifyOutcome.EXPIRED:
            raise Forbidden(TOKEN_EXPIRED)
        if outcome is not VerifyOutcome.VALID:
            raise Forbidden(TOKEN_INVALID)
        return claims
