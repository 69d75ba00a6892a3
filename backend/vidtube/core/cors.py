"""CORS policy for the account API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Allow the configured front-end origins to call ``/api/*`` with cookies.

    The ``accessToken``/``refreshToken`` cookies only travel cross-origin when
    credentials are allowed, which browsers refuse for a wildcard origin. A
    blank or ``"*"`` ``CORS_ORIGINS`` therefore opens the API to any origin
    without credentials, while an explicit list enables them.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
