"""Auth gate callbacks for ``flask-jwt-extended``.

The gate verifies the access token (``Authorization: Bearer`` header or the
``accessToken`` cookie) and resolves its subject to an :class:`Account`, made
available as ``flask_jwt_extended.current_user``. Every rejection answers 401
in the standard error envelope.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from vidtube.core.errors import error_envelope
from vidtube.core.extensions import jwt
from vidtube.models.account import Account

log = logging.getLogger(__name__)


@jwt.user_lookup_loader
def _load_account(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]) -> Account | None:
    from vidtube.repositories.account import AccountRepository

    subject = jwt_data.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        return None
    return AccountRepository().get(int(subject))


@jwt.user_lookup_error_loader
def _account_not_found(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]):
    log.warning("auth.gate.unknown_subject", extra={"account_id": jwt_data.get("sub")})
    return error_envelope(HTTPStatus.UNAUTHORIZED, "Invalid access token")


@jwt.unauthorized_loader
def _missing_token(reason: str):
    return error_envelope(HTTPStatus.UNAUTHORIZED, "Unauthorized request")


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    log.warning("auth.gate.invalid_token reason=%s", reason)
    return error_envelope(HTTPStatus.UNAUTHORIZED, "Invalid access token")


@jwt.expired_token_loader
def _expired_token(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
    return error_envelope(HTTPStatus.UNAUTHORIZED, "Access token expired")

