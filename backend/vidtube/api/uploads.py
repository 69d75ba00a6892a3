"""Temporary stash for multipart uploads.

Files are written to ``UPLOAD_FOLDER`` under a unique name for the duration of
the ``with`` block and removed afterwards, whatever the outcome.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterator
from uuid import uuid4

from flask import current_app, request
from werkzeug.utils import secure_filename

log = logging.getLogger(__name__)


@contextlib.contextmanager
def stash_uploads(*field_names: str) -> Iterator[dict[str, str | None]]:
    """Save the named multipart files locally and yield ``field -> path``.

    Absent or empty file fields map to ``None``.
    """

    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    paths: dict[str, str | None] = {}
    try:
        for name in field_names:
            storage = request.files.get(name)
            if storage is None or not storage.filename:
                paths[name] = None
                continue
            filename = secure_filename(storage.filename) or "upload"
            path = os.path.join(folder, f"{uuid4().hex}-{filename}")
            storage.save(path)
            paths[name] = path
        yield paths
    finally:
        for path in paths.values():
            if path and os.path.exists(path):
                try:
                    os.remove(path)
                except OSError:
                    log.warning("could not remove stashed upload %s", path, exc_info=True)
