from dataclasses import dataclass
import logging

import click
from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models.credential_store import CredentialStore
from services.auth_session import AuthSessionService
from services.authorization import AuthorizationGate
from utils.tokens import SigningDomain, TokenIssuer

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Token Auth API",
        "version": API_VERSION,
        "description": "Registers users and issues, refreshes and revokes access and refresh tokens.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


@dataclass
class TokenAuth:
    """Components built once per app; views reach them via app.extensions["token_auth"]."""
    store: CredentialStore
    issuer: TokenIssuer
    sessions: AuthSessionService
    gate: AuthorizationGate


def build_token_auth(config) -> TokenAuth:
    """Wire store, issuer, session service and gate from a config mapping."""
    store = CredentialStore(config["DATABASE_URL"], echo=config.get("SQLALCHEMY_ECHO", False))
    store.reload()
    issuer = TokenIssuer(
        access=SigningDomain(config["JWT_ACCESS_SECRET"], config["ACCESS_TOKEN_EXPIRES"]),
        refresh=SigningDomain(config["JWT_REFRESH_SECRET"], config["REFRESH_TOKEN_EXPIRES"]),
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
    )
    if config["JWT_ACCESS_SECRET"] == config["JWT_REFRESH_SECRET"]:
        logger.warning("access and refresh tokens share a signing secret")
    return TokenAuth(
        store=store,
        issuer=issuer,
        sessions=AuthSessionService(store, issuer),
        gate=AuthorizationGate(issuer),
    )


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    `overrides` is applied on top of the selected config class (used by tests).
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    config_cls = get_config(config_name)
    app.config.from_object(config_cls)
    if overrides:
        app.config.update(overrides)
    config_cls.validate(app.config)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Uniform error envelope
    register_error_handlers(app)

    auth = build_token_auth(app.config)
    app.extensions["token_auth"] = auth

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        auth.store.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Token Auth API",
            "docs": "/apidocs/",
            "health": "/health",
        }, 200

    @app.cli.command("prune-refresh-tokens")
    def prune_refresh_tokens():
        """Delete stored refresh tokens that have already expired."""
        removed = auth.store.prune_expired_refresh_tokens()
        click.echo(f"Removed {removed} expired refresh token(s)")

    return app
