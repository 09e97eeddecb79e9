"""Tests for argon2 password hashing helpers."""

from utils.security import hash_password, verify_password


def test_hash_is_not_plaintext():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert hashed.startswith("$argon2")


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_accepts_correct_password():
    hashed = hash_password("correct horse")
    assert verify_password("correct horse", hashed) is True


def test_verify_rejects_wrong_password():
    hashed = hash_password("correct horse")
    assert verify_password("battery staple", hashed) is False
