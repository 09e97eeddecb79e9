from __future__ import annotations

from flask import Blueprint, jsonify, g

from utils.decorators import token_required

bp = Blueprint("users", __name__)


@bp.get("/profile")
@token_required()
def profile():
    """
    Protected route: echo the identity carried by the access token.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Token missing
      403:
        description: Token expired or invalid
    """
    claims = g.current_user
    return jsonify(
        {
            "message": f"Welcome, {claims.name}! This is protected data.",
            "user": claims.to_dict(),
        }
    ), 200
