from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class InvalidTokenError(Exception):
    """Raised when a refresh token cannot be decoded or is not a refresh token."""


class TokenProvider(Protocol):
    """Port for issuing access/refresh tokens and decoding refresh tokens."""

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str: ...

    def create_refresh_token(self, *, identity: int | str) -> str: ...

    def decode_refresh_token(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=10),
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(
        self,
        *,
        identity: int | str,
        ttype: str,
        exp_delta: timedelta,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        self._seq += 1
        jti = f"jti-{self._seq}"
        token = f"{ttype}.{identity}.{jti}"
        now = datetime.now(tz=UTC)
        payload: dict[str, Any] = {
            "sub": str(identity),
            "type": ttype,
            "jti": jti,
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
        }
        if additional_claims:
            payload.update(additional_claims)
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="access",
            exp_delta=self.access_expires,
            additional_claims=additional_claims,
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._mk(identity=identity, ttype="refresh", exp_delta=self.refresh_expires)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None or payload["type"] != "refresh":
            raise InvalidTokenError("Unknown or non-refresh token")
        if payload["exp"] <= int(datetime.now(tz=UTC).timestamp()):
            raise InvalidTokenError("Refresh token expired")
        return dict(payload)
