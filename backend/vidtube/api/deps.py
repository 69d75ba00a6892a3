"""Shared API helpers for envelopes, auth, cookies and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import current_user, verify_jwt_in_request

from vidtube.models.account import Account
from vidtube.services import AuthService, ProfileService, ServiceContext
from vidtube.services.auth.dto import TokenPairOut

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def json_response(data: Any = None, *, status: int = 200, message: str = "Success") -> Response:
    """Return the success envelope with ``status`` mirrored on the transport."""

    response = jsonify(
        {
            "status": status,
            "data": data,
            "message": message,
            "success": status < 400,
        }
    )
    response.status_code = status
    return response


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (header or cookie)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_account() -> Account:
    """Return the account resolved by the auth gate for this request."""

    return cast(Account, current_user._get_current_object())


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------ Service wiring -------------------------------


def _context() -> ServiceContext:
    from vidtube.core.logger import ensure_request_id

    return ServiceContext(request_id=ensure_request_id())


def build_auth_service() -> AuthService:
    """Create an :class:`AuthService` bound to the app's collaborators."""

    return AuthService(
        token_provider=current_app.extensions["token_provider"],
        asset_uploader=current_app.extensions["asset_uploader"],
        ctx=_context(),
    )


def build_profile_service() -> ProfileService:
    """Create a :class:`ProfileService` bound to the app's asset uploader."""

    return ProfileService(asset_uploader=current_app.extensions["asset_uploader"], ctx=_context())


# --------------------------------- Cookies -----------------------------------


def _cookie_params() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("AUTH_COOKIE_SECURE", True)),
        "samesite": current_app.config.get("AUTH_COOKIE_SAMESITE"),
        "path": "/",
    }


def _seconds(value: timedelta) -> int:
    return int(value.total_seconds())


def set_token_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Set ``accessToken``/``refreshToken`` with ``Max-Age`` = token lifetime."""

    params = _cookie_params()
    response.set_cookie(
        ACCESS_COOKIE,
        tokens.access_token,
        max_age=_seconds(current_app.config["ACCESS_TOKEN_EXPIRY"]),
        **params,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=_seconds(current_app.config["REFRESH_TOKEN_EXPIRY"]),
        **params,
    )
    return response


def clear_token_cookies(response: Response) -> Response:
    """Expire both session cookies."""

    params = _cookie_params()
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            name,
            path=params["path"],
            secure=params["secure"],
            httponly=True,
            samesite=params["samesite"],
        )
    return response
