"""
Signed token issuance and verification (JWT via PyJWT).

Access and refresh tokens live in two independent signing domains, each with
its own secret and lifetime. A token carries:
- name: the username it asserts
- iat / exp: issue and expiry timestamps (seconds)
- jti: random id so that every issued token string is unique
- type: "access" or "refresh"

verify() never raises for bad input; it reports exactly one VerifyOutcome.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import uuid

import jwt


class TokenDomain(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class VerifyOutcome(Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class SigningDomain:
    secret: str
    expires: timedelta


@dataclass(frozen=True)
class TokenClaims:
    name: str
    issued_at: datetime
    expires_at: datetime
    jti: str
    token_type: TokenDomain

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
            "jti": self.jti,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], expected: TokenDomain) -> Optional["TokenClaims"]:
        """Build claims from a decoded payload; None if a required field is missing or ill-typed."""
        name = payload.get("name")
        iat = payload.get("iat")
        exp = payload.get("exp")
        jti = payload.get("jti")
        if not isinstance(name, str) or not name:
            return None
        if not isinstance(jti, str) or not jti:
            return None
        # bool is an int subclass
        for ts in (iat, exp):
            if isinstance(ts, bool) or not isinstance(ts, (int, float)):
                return None
        if payload.get("type") != expected.value:
            return None
        return cls(
            name=name,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            jti=jti,
            token_type=expected,
        )


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID)."""
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Signs and verifies tokens for the access and refresh domains."""

    def __init__(self, access: SigningDomain, refresh: SigningDomain, algorithm: str = "HS256"):
        self._domains = {TokenDomain.ACCESS: access, TokenDomain.REFRESH: refresh}
        self.algorithm = algorithm

    def domain(self, domain: TokenDomain) -> SigningDomain:
        return self._domains[domain]

    def issue(self, domain: TokenDomain, name: str) -> str:
        signing = self._domains[domain]
        now = _now()
        payload = {
            "name": name,
            "iat": int(now.timestamp()),
            "exp": int((now + signing.expires).timestamp()),
            "jti": generate_jti(),
            "type": domain.value,
        }
        return jwt.encode(payload, signing.secret, algorithm=self.algorithm)

    def issue_access(self, name: str) -> str:
        return self.issue(TokenDomain.ACCESS, name)

    def issue_refresh(self, name: str) -> str:
        return self.issue(TokenDomain.REFRESH, name)

    def verify(self, domain: TokenDomain, token: str) -> Tuple[Optional[TokenClaims], VerifyOutcome]:
        """
        Check signature and expiry under the given domain.
        Signature is checked before expiry, so a forged expired token is INVALID.
        """
        if not isinstance(token, str) or not token:
            return None, VerifyOutcome.INVALID
        signing = self._domains[domain]
        try:
            payload = jwt.decode(
                token,
                signing.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return None, VerifyOutcome.EXPIRED
        except jwt.InvalidTokenError:
            return None, VerifyOutcome.INVALID

        claims = TokenClaims.from_payload(payload, domain)
        if claims is None:
            return None, VerifyOutcome.INVALID
        return claims, VerifyOutcome.VALID

    def expires_at(self, token: str) -> Optional[datetime]:
        """Read exp without verifying, for bookkeeping on tokens this issuer just minted."""
        payload = jwt.decode(token, options={"verify_signature": False})
        exp = payload.get("exp")
        return datetime.fromtimestamp(exp, tz=timezone.utc) if exp is not None else None
