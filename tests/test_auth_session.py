"""Tests for the registration / login / refresh / logout state machine."""

from datetime import timedelta

import pytest
from argon2.exceptions import HashingError
from sqlalchemy.exc import OperationalError

from models import UserAlreadyExists
from services.errors import BadRequest, Conflict, Forbidden, Internal, Unauthorized
from utils.tokens import TokenDomain, VerifyOutcome


def test_register_creates_user_without_tokens(sessions, store):
    user = sessions.register("alice", "pw1")
    assert user.username == "alice"
    stored = store.find_by_username("alice")
    assert stored.password_hash != "pw1"
    assert stored.refresh_token_set == set()


@pytest.mark.parametrize("username,password", [("", "pw"), ("alice", ""), (None, "pw"), ("alice", None)])
def test_register_requires_both_fields(sessions, username, password):
    with pytest.raises(BadRequest):
        sessions.register(username, password)


def test_register_twice_conflicts(sessions):
    sessions.register("alice", "pw1")
    with pytest.raises(Conflict):
        sessions.register("alice", "other")


def test_register_race_lost_at_store_is_conflict(sessions, store, monkeypatch):
    monkeypatch.setattr(store, "find_by_username", lambda username: None)

    def _create(user):
        raise UserAlreadyExists("taken")

    monkeypatch.setattr(store, "create", _create)
    with pytest.raises(Conflict):
        sessions.register("alice", "pw1")


def test_login_returns_distinct_verifiable_tokens(sessions, issuer):
    sessions.register("alice", "pw1")
    pair = sessions.login("alice", "pw1")
    assert pair.access_token != pair.refresh_token

    access_claims, access_outcome = issuer.verify(TokenDomain.ACCESS, pair.access_token)
    refresh_claims, refresh_outcome = issuer.verify(TokenDomain.REFRESH, pair.refresh_token)
    assert access_outcome is VerifyOutcome.VALID
    assert refresh_outcome is VerifyOutcome.VALID
    assert access_claims.name == refresh_claims.name == "alice"


def test_login_appends_one_refresh_token_each_time(sessions, store):
    sessions.register("alice", "pw1")
    first = sessions.login("alice", "pw1")
    second = sessions.login("alice", "pw1")
    assert store.find_by_username("alice").refresh_token_set == {
        first.refresh_token,
        second.refresh_token,
    }
    # earlier sessions stay usable
    assert sessions.refresh(first.refresh_token)


def test_login_failures_are_indistinguishable(sessions):
    sessions.register("alice", "pw1")
    with pytest.raises(Unauthorized) as wrong_password:
        sessions.login("alice", "nope")
    with pytest.raises(Unauthorized) as unknown_user:
        sessions.login("mallory", "pw1")
    assert wrong_password.value.message == unknown_user.value.message


def test_refresh_issues_access_token_without_touching_store(sessions, store, issuer):
    sessions.register("alice", "pw1")
    pair = sessions.login("alice", "pw1")
    before = store.find_by_username("alice").refresh_token_set

    for _ in range(3):
        access = sessions.refresh(pair.refresh_token)
        claims, outcome = issuer.verify(TokenDomain.ACCESS, access)
        assert outcome is VerifyOutcome.VALID
        assert claims.name == "alice"

    assert store.find_by_username("alice").refresh_token_set == before


def test_refresh_without_token_is_unauthorized(sessions):
    with pytest.raises(Unauthorized):
        sessions.refresh(None)


def test_refresh_with_unstored_token_is_forbidden(sessions, issuer):
    sessions.register("alice", "pw1")
    well_formed = issuer.issue_refresh("alice")
    with pytest.raises(Forbidden) as exc:
        sessions.refresh(well_formed)
    assert exc.value.message == "Invalid refresh token"


def test_refresh_with_claims_for_another_user_is_forbidden(sessions, store, make_token):
    sessions.register("alice", "pw1")
    forged = make_token(domain="refresh", name="mallory")
    store.append_refresh_token("alice", forged)
    with pytest.raises(Forbidden):
        sessions.refresh(forged)


def test_refresh_with_expired_stored_token_is_forbidden(sessions, store, make_token):
    sessions.register("alice", "pw1")
    expired = make_token(domain="refresh", expires_in=timedelta(minutes=-1))
    store.append_refresh_token("alice", expired)
    with pytest.raises(Forbidden):
        sessions.refresh(expired)


def test_refresh_rejects_access_token(sessions, store):
    sessions.register("alice", "pw1")
    pair = sessions.login("alice", "pw1")
    store.append_refresh_token("alice", pair.access_token)
    with pytest.raises(Forbidden):
        sessions.refresh(pair.access_token)


def test_logout_revokes_refresh_token(sessions, store):
    sessions.register("alice", "pw1")
    pair = sessions.login("alice", "pw1")
    sessions.logout(pair.refresh_token)
    assert store.find_by_username("alice").refresh_token_set == set()
    with pytest.raises(Forbidden):
        sessions.refresh(pair.refresh_token)


@pytest.mark.parametrize("token", ["unknown-token", "", None])
def test_logout_with_unknown_token_is_a_noop(sessions, store, token):
    sessions.register("alice", "pw1")
    pair = sessions.login("alice", "pw1")
    sessions.logout(token)
    assert store.find_by_username("alice").refresh_token_set == {pair.refresh_token}


def test_store_failure_is_internal(sessions, store, monkeypatch):
    def _boom(username):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(store, "find_by_username", _boom)
    with pytest.raises(Internal) as exc:
        sessions.login("alice", "pw1")
    assert "db down" not in exc.value.message


def test_unknown_user_still_costs_one_password_verify(sessions, monkeypatch):
    import services.auth_session as auth_session

    calls = []

    def _counting_verify(password, password_hash):
        calls.append(password_hash)
        return False

    sessions.register("alice", "pw1")
    monkeypatch.setattr(auth_session, "verify_password", _counting_verify)

    with pytest.raises(Unauthorized):
        sessions.login("mallory", "pw1")
    assert calls == [auth_session._DUMMY_PASSWORD_HASH]

    calls.clear()
    with pytest.raises(Unauthorized):
        sessions.login("alice", "wrong")
    assert len(calls) == 1


def test_hashing_failure_is_internal(sessions, monkeypatch):
    import services.auth_session as auth_session

    def _broken_hash(password):
        raise HashingError("out of memory")

    monkeypatch.setattr(auth_session, "hash_password", _broken_hash)
    with pytest.raises(Internal) as exc:
        sessions.register("alice", "pw1")
    assert "out of memory" not in exc.value.message
