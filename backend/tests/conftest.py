"""Pytest fixtures for the account API.

Each test gets a fresh application built from ``TestingConfig`` and an empty
in-memory SQLite schema, created before and dropped after the test. The asset
uploader is replaced by an in-memory stub so no test reaches the network.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask

from vidtube.core.config import TestingConfig
from vidtube.core.extensions import db as _db
from vidtube.factory import create_app
from vidtube.services._shared.ports import StubAssetUploader


@pytest.fixture()
def app(tmp_path: Path) -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with an active app context, a created schema, the stub
        uploader and an upload folder under ``tmp_path``.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig, instance_relative_config=False)
    application.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")
    application.extensions["asset_uploader"] = StubAssetUploader()
    application.logger.setLevel("WARNING")

    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(app: Flask):
    """Return the Flask-scoped SQLAlchemy session of the test app."""
    return _db.session


@pytest.fixture()
def uploader(app: Flask) -> StubAssetUploader:
    """The stub asset uploader wired into ``app``."""
    return app.extensions["asset_uploader"]


@pytest.fixture()
def client(app: Flask):
    """Return a Flask test client without a cookie jar.

    Tokens travel explicitly (header or body); tests exercising the cookie
    transport build their own cookie-enabled client.
    """
    return app.test_client(use_cookies=False)


@pytest.fixture()
def image_file(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing a small fake image to ``tmp_path`` and returning its path."""

    def _make(name: str = "avatar.png") -> Path:
        path = tmp_path / name
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + os.urandom(32))
        return path

    return _make


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`."""

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2026-01-01")

    return _factory


# -- Hook up Factory Boy to the app session ------------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper to the app session when a test uses it."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(_db.session)
    yield
    SQLAlchemySession.set(None)
