"""
Password hashing helpers (argon2id via argon2-cffi).

- hash_password: salted, cost-parameterized one-way hash
- verify_password: constant-time check, False on mismatch

Plaintext passwords never leave these functions.
"""
from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2.

    Raises argon2.exceptions.HashingError if hashing fails.
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against an Argon2 hash."""
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
