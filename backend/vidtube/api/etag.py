"""ETag helpers for account representations."""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any

from flask import Response


def generate_etag(entity: Any) -> str | None:
    """Hash ``id`` and ``updated_at`` into a stable fingerprint.

    Returns ``None`` when the entity has no ``id``.
    """

    identifier = getattr(entity, "id", None)
    if identifier is None:
        return None
    updated_at: datetime | None = getattr(entity, "updated_at", None)
    payload = f"{identifier}:{updated_at.isoformat() if updated_at else ''}".encode()
    return hashlib.sha256(payload).hexdigest()


def set_response_etag(response: Response, entity: Any) -> Response:
    """Attach an ``ETag`` header to a Flask response when possible."""

    value = generate_etag(entity)
    if value is not None:
        response.set_etag(value)
    return response
