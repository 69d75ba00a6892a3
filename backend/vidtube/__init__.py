"""Expose the application factory at package level.

``from vidtube import create_app`` is the entry point for WSGI servers and the
``flask`` CLI (``FLASK_APP=vidtube``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
