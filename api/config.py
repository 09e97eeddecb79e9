"""
Environment-aware configuration.
Values are read once (from the environment / .env) into config classes;
create_app() hands them to the store and token issuer constructors.
"""
import os
import re
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()  # Read .env if present

DEV_ACCESS_SECRET = "dev-access-secret-change-me-0123456789"
DEV_REFRESH_SECRET = "dev-refresh-secret-change-me-0123456789"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value) -> timedelta:
    """
    Parse a token lifetime: plain seconds ("900") or a number with a
    s/m/h/d suffix ("15m", "7d"). Raises ValueError on anything else.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit.lower()])


def _database_url() -> str:
    return os.getenv("DATABASE_URL") or os.getenv("DB_URI") or "sqlite:///token-auth.db"


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    DATABASE_URL = _database_url()
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "false").lower() in ("1", "true", "yes")
    # Two signing domains: access tokens and refresh tokens never share a secret
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", DEV_ACCESS_SECRET)
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", DEV_REFRESH_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES = parse_duration(os.getenv("ACCESS_TOKEN_EXPIRATION", "15m"))
    REFRESH_TOKEN_EXPIRES = parse_duration(os.getenv("REFRESH_TOKEN_EXPIRATION", "7d"))

    @staticmethod
    def validate(config):
        """Hook for environment-specific startup checks on the final app config."""


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    DATABASE_URL = "sqlite://"
    JWT_ACCESS_SECRET = "test-access-secret-0123456789abcdef"
    JWT_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    REFRESH_TOKEN_EXPIRES = timedelta(days=7)


class ProductionConfig(BaseConfig):
    DEBUG = False

    @staticmethod
    def validate(config):
        access, refresh = config["JWT_ACCESS_SECRET"], config["JWT_REFRESH_SECRET"]
        if access == DEV_ACCESS_SECRET or refresh == DEV_REFRESH_SECRET:
            raise RuntimeError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must be set in production")
        if access == refresh:
            raise RuntimeError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
