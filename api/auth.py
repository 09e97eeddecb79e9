"""
Authentication blueprint:
- POST   /register  -> create a user (no tokens issued)
- POST   /login     -> access token + refresh token
- POST   /token     -> new access token from a stored refresh token
- DELETE /logout    -> revoke a refresh token (always 204)

The routes only parse JSON bodies and shape responses; the rules live in
services.auth_session.AuthSessionService.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app

from models.schemas.user import CredentialsSchema, UserOutSchema

bp = Blueprint("auth", __name__)

credentials_schema = CredentialsSchema()
user_out_schema = UserOutSchema()


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _sessions():
    return current_app.extensions["token_auth"].sessions


@bp.post("/register")
def register():
    """
    Register a new user.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            username: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Missing username or password
      409:
        description: User already exists
    """
    data = credentials_schema.load(_json_body())
    user = _sessions().register(data["username"], data["password"])
    return jsonify(
        {
            "message": "User created successfully",
            "data": user_out_schema.dump(user),
        }
    ), 201


@bp.post("/login")
def login():
    """
    Login: return accessToken and refreshToken
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             username: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Invalid username or password
    """
    data = credentials_schema.load(_json_body())
    pair = _sessions().login(data["username"], data["password"])
    return jsonify(
        {
            "accessToken": pair.access_token,
            "refreshToken": pair.refresh_token,
        }
    ), 200


@bp.post("/token")
def token():
    """
    Exchange a refresh token for a new access token. The refresh token is not rotated.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             token: { type: string }
    responses:
      200:
        description: OK (returns accessToken)
      401:
        description: Refresh token missing
      403:
        description: Refresh token invalid, expired or revoked
    """
    # non-string tokens fall through to the service and are rejected as unknown (403)
    access_token = _sessions().refresh(_json_body().get("token"))
    return jsonify({"accessToken": access_token}), 200


@bp.delete("/logout")
def logout():
    """
    Logout: revoke a refresh token. Succeeds whether or not the token was known.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             token: { type: string }
    responses:
      204:
        description: Logged out
    """
    token = _json_body().get("token")
    _sessions().logout(token if isinstance(token, str) else None)
    return ("", 204)
