from __future__ import annotations
from functools import wraps
from flask import request, g, current_app


def token_required():
    """
    Protect a view with the access-token gate.
    On success the decoded TokenClaims are available as g.current_user.
    Gate failures propagate as AuthError and are rendered by the error handlers.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            gate = current_app.extensions["token_auth"].gate
            g.current_user = gate.authorize(request.headers.get("Authorization"))
            return fn(*args, **kwargs)

        return wrapper

    return decorator
