"""Unit tests for the two-secret JWT token provider."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from flask_jwt_extended import decode_token

from vidtube.infra.jwt.jwt_token_provider import JWTTokenProvider
from vidtube.services._shared.ports import InvalidTokenError


@pytest.fixture()
def provider(app) -> JWTTokenProvider:
    return JWTTokenProvider.from_config(app.config)


def test_from_config_reads_refresh_settings(app, provider):
    assert provider.refresh_secret == app.config["REFRESH_TOKEN_SECRET"]
    assert provider.access_expires == timedelta(minutes=15)
    assert provider.refresh_expires == timedelta(days=10)


def test_access_token_is_verifiable_by_the_auth_gate(provider):
    token = provider.create_access_token(
        identity=7, additional_claims={"username": "ivan", "email": "i@x.io", "fullname": "Ivan"}
    )

    claims = decode_token(token)
    assert claims["sub"] == "7"
    assert claims["type"] == "access"
    assert claims["username"] == "ivan"
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_refresh_token_round_trip(provider):
    token = provider.create_refresh_token(identity=7)

    claims = provider.decode_refresh_token(token)
    assert claims["sub"] == "7"
    assert claims["type"] == "refresh"
    assert claims["jti"]
    assert claims["exp"] - claims["iat"] == 10 * 24 * 3600
    assert set(claims) == {"sub", "jti", "type", "iat", "exp"}


def test_refresh_tokens_are_unique(provider):
    assert provider.create_refresh_token(identity=1) != provider.create_refresh_token(identity=1)


def test_access_token_rejected_as_refresh_token(provider):
    token = provider.create_access_token(identity=7)
    with pytest.raises(InvalidTokenError):
        provider.decode_refresh_token(token)


def test_foreign_secret_rejected(provider):
    forged = jwt.encode(
        {"sub": "7", "jti": "x", "type": "refresh", "exp": 9999999999},
        "some-other-refresh-secret-0123456789abcdef",
    )
    with pytest.raises(InvalidTokenError):
        provider.decode_refresh_token(forged)


def test_missing_required_claims_rejected(provider):
    token = jwt.encode({"sub": "7", "type": "refresh"}, provider.refresh_secret)
    with pytest.raises(InvalidTokenError):
        provider.decode_refresh_token(token)


def test_garbage_rejected(provider):
    with pytest.raises(InvalidTokenError):
        provider.decode_refresh_token("not-a-jwt")


def test_expired_refresh_token_rejected(provider, freeze_time):
    with freeze_time("2026-01-01"):
        token = provider.create_refresh_token(identity=7)
    with freeze_time("2026-01-12"):
        with pytest.raises(InvalidTokenError):
            provider.decode_refresh_token(token)
    with freeze_time("2026-01-10"):
        assert provider.decode_refresh_token(token)["sub"] == "7"
