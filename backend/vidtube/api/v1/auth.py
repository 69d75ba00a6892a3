"""Session lifecycle endpoints: register, login, logout, refresh, password."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, request

from vidtube.api.deps import (
    REFRESH_COOKIE,
    build_auth_service,
    clear_token_cookies,
    current_account,
    json_response,
    require_auth,
    set_token_cookies,
    timing,
)
from vidtube.api.etag import set_response_etag
from vidtube.api.uploads import stash_uploads
from vidtube.core.extensions import limiter
from vidtube.schemas import (
    AccountSchema,
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from vidtube.services.auth.dto import ChangePasswordIn, LoginIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
change_password_schema = ChangePasswordSchema()
account_schema = AccountSchema()
token_pair_schema = TokenPairSchema()
login_response_schema = LoginResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _payload() -> dict[str, Any]:
    """JSON body when present, else form fields."""

    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form.to_dict()


@bp.post("/register")
@timing
def register():
    """Register a new account from multipart fields plus image files."""

    data = register_schema.load(_payload())
    service = build_auth_service()
    with stash_uploads("avatar", "coverImage") as files:
        account = service.register(
            RegisterIn(
                fullname=data["fullname"],
                username=data["username"],
                email=data["email"],
                password=data["password"],
                avatar_path=files["avatar"],
                cover_image_path=files["coverImage"],
            )
        )
    response = json_response(
        account_schema.dump(account),
        status=201,
        message="User registered successfully",
    )
    return set_response_etag(response, account)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials, open a session and set both token cookies."""

    data = login_schema.load(_payload())
    result = build_auth_service().login(
        LoginIn(username=data["username"], email=data["email"], password=data["password"])
    )
    body = login_response_schema.dump(
        {
            "user": result.account,
            "access_token": result.tokens.access_token,
            "refresh_token": result.tokens.refresh_token,
        }
    )
    response = json_response(body, message="User logged in successfully")
    return set_token_cookies(response, result.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Clear the stored refresh token and both cookies."""

    build_auth_service().logout(current_account().id)
    response = json_response({}, message="User logged out successfully")
    return clear_token_cookies(response)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the session from the ``refreshToken`` cookie or body field."""

    token = request.cookies.get(REFRESH_COOKIE) or refresh_schema.load(_payload())["refresh_token"]
    tokens = build_auth_service().refresh(RefreshIn(refresh_token=token))
    response = json_response(token_pair_schema.dump(tokens), message="Access token refreshed")
    return set_token_cookies(response, tokens)


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    """Replace the password of the authenticated account."""

    data = change_password_schema.load(_payload())
    build_auth_service().change_password(
        ChangePasswordIn(
            account_id=current_account().id,
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return json_response({}, message="Password changed successfully")
