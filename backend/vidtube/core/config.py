"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


# Loads .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(raw: str) -> timedelta:
    """Parse a compact duration such as ``"15m"``, ``"1d"`` or ``"3600"``.

    A bare number is read as seconds.

    :raises ValueError: If ``raw`` does not match ``<int>[s|m|h|d|w]``.
    """
    match = _DURATION_RE.match(raw or "")
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


def env_duration(name: str, default: str) -> timedelta:
    """Read a duration from the environment, falling back to ``default``."""
    return parse_duration(os.getenv(name, default))


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    ACCESS_TOKEN_SECRET / REFRESH_TOKEN_SECRET: str
        Two distinct signing secrets. Access tokens are minted and verified by
        ``flask-jwt-extended``, so ``JWT_SECRET_KEY`` mirrors the access secret.
    ACCESS_TOKEN_EXPIRY / REFRESH_TOKEN_EXPIRY: timedelta
        Token lifetimes, read from compact durations (``"1d"``, ``"10d"``).
    AUTH_COOKIE_SECURE / AUTH_COOKIE_SAMESITE: bool / str | None
        Attributes of the ``accessToken`` and ``refreshToken`` cookies. Both
        cookies are always ``HttpOnly``.
    UPLOAD_FOLDER: str
        Local directory where multipart files are stashed during a request.
    ASSET_UPLOAD_URL: str
        Upload endpoint of the image-hosting service.
    ASSET_UPLOAD_API_KEY / ASSET_UPLOAD_API_SECRET: str
        Credentials used to sign upload requests.
    ASSET_UPLOAD_TIMEOUT: float
        Seconds to wait for the hosting service before failing the upload.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS_TOKEN_SECRET")
    ACCESS_TOKEN_EXPIRY = env_duration("ACCESS_TOKEN_EXPIRY", "1d")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH_TOKEN_SECRET")
    REFRESH_TOKEN_EXPIRY = env_duration("REFRESH_TOKEN_EXPIRY", "10d")

    # flask-jwt-extended acts as the auth gate for access tokens
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRY
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_COOKIE_CSRF_PROTECT = False

    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", True)
    AUTH_COOKIE_SAMESITE = os.getenv("AUTH_COOKIE_SAMESITE") or None
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # Uploads
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "./public/temp")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
    ASSET_UPLOAD_URL = os.getenv("ASSET_UPLOAD_URL", "")
    ASSET_UPLOAD_API_KEY = os.getenv("ASSET_UPLOAD_API_KEY", "")
    ASSET_UPLOAD_API_SECRET = os.getenv("ASSET_UPLOAD_API_SECRET", "")
    ASSET_UPLOAD_FOLDER = os.getenv("ASSET_UPLOAD_FOLDER", "")
    ASSET_UPLOAD_TIMEOUT = float(os.getenv("ASSET_UPLOAD_TIMEOUT", "30"))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Pins distinct token secrets and turns rate limiting off.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = True

    ACCESS_TOKEN_SECRET = "testing-access-token-secret-0123456789abcdef"
    REFRESH_TOKEN_SECRET = "testing-refresh-token-secret-0123456789abcdef"
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    ACCESS_TOKEN_EXPIRY = timedelta(minutes=15)
    REFRESH_TOKEN_EXPIRY = timedelta(days=10)
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRY

    RATELIMIT_ENABLED = False
    USE_PROXYFIX = False
    ASSET_UPLOAD_URL = "https://assets.invalid/v1_1/testing/image/upload"
    ASSET_UPLOAD_API_KEY = "testing-key"
    ASSET_UPLOAD_API_SECRET = "testing-secret"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
