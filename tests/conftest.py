"""Pytest fixtures for the token auth API."""

from datetime import datetime, timedelta, timezone
import uuid

import jwt
import pytest

from api import create_app


@pytest.fixture
def app():
    """A fresh app per test, backed by its own in-memory SQLite database."""
    application = create_app("test")
    yield application
    application.extensions["token_auth"].store.close()
    application.extensions["token_auth"].store.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth(app):
    return app.extensions["token_auth"]


@pytest.fixture
def store(auth):
    return auth.store


@pytest.fixture
def issuer(auth):
    return auth.issuer


@pytest.fixture
def sessions(auth):
    return auth.sessions


@pytest.fixture
def make_token(app):
    """Sign an arbitrary payload, defaulting to a well-formed access token for 'alice'."""

    def _make(domain="access", secret=None, expires_in=timedelta(minutes=5), **claims):
        now = datetime.now(timezone.utc)
        payload = {
            "name": "alice",
            "iat": int((now - timedelta(minutes=10)).timestamp()),
            "exp": int((now + expires_in).timestamp()),
            "jti": str(uuid.uuid4()),
            "type": domain,
        }
        payload.update(claims)
        payload = {k: v for k, v in payload.items() if v is not None}
        if secret is None:
            key = "JWT_ACCESS_SECRET" if domain == "access" else "JWT_REFRESH_SECRET"
            secret = app.config[key]
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def register(client):
    def _register(username="alice", password="pw1"):
        return client.post("/register", json={"username": username, "password": password})

    return _register


@pytest.fixture
def login(client, register):
    """Register (if needed) and log in; returns the token JSON."""

    def _login(username="alice", password="pw1"):
        register(username, password)
        resp = client.post("/login", json={"username": username, "password": password})
        assert resp.status_code == 200
        return resp.get_json()

    return _login
