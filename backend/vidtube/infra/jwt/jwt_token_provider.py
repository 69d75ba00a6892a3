# vidtube/infra/jwt/jwt_token_provider.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt

from vidtube.services._shared.ports import InvalidTokenError, TokenProvider

REFRESH_ALGORITHM = "HS256"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Token adapter with two secrets.

    Access tokens are minted by Flask-JWT-Extended (``JWT_SECRET_KEY`` is the
    access secret), so the same extension verifies them at the auth gate.
    Refresh tokens are signed with PyJWT under the refresh secret and carry
    only ``sub``, ``jti``, ``type``, ``iat`` and ``exp``.

    .. note::
       ``create_access_token`` requires an active Flask app context.
    """

    refresh_secret: str
    access_expires: timedelta
    refresh_expires: timedelta

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> JWTTokenProvider:
        return cls(
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            access_expires=config["ACCESS_TOKEN_EXPIRY"],
            refresh_expires=config["REFRESH_TOKEN_EXPIRY"],
        )

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(
                identity=str(identity),
                additional_claims=additional_claims or {},
                expires_delta=self.access_expires,
            ),
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        now = datetime.now(tz=UTC)
        payload = {
            "sub": str(identity),
            "jti": uuid4().hex,
            "type": "refresh",
            "iat": now,
            "exp": now + self.refresh_expires,
        }
        return jwt.encode(payload, self.refresh_secret, algorithm=REFRESH_ALGORITHM)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self.refresh_secret,
                algorithms=[REFRESH_ALGORITHM],
                options={"require": ["exp", "sub", "jti"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(str(exc)) from exc
        if claims.get("type") != "refresh":
            raise InvalidTokenError("Not a refresh token")
        return cast(dict[str, Any], claims)
