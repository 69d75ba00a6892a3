"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, rate limiting and collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidtube.models` package to ensure SQLAlchemy metadata is ready
        for migrations, then registers the token provider and asset uploader
        under ``app.extensions``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidtube import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    if app.config["ACCESS_TOKEN_SECRET"] == app.config["REFRESH_TOKEN_SECRET"]:
        log.warning("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET are identical")

    from vidtube.infra.jwt.jwt_token_provider import JWTTokenProvider
    from vidtube.infra.uploads.http_asset_uploader import HTTPAssetUploader

    app.extensions["token_provider"] = JWTTokenProvider.from_config(app.config)
    app.extensions["asset_uploader"] = HTTPAssetUploader.from_config(app.config)
