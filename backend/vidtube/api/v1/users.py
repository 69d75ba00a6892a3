"""Profile endpoints for the authenticated account."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import (
    build_profile_service,
    current_account,
    json_response,
    require_auth,
    timing,
)
from vidtube.api.etag import set_response_etag
from vidtube.api.uploads import stash_uploads
from vidtube.schemas import AccountDetailsSchema, AccountSchema
from vidtube.services.profile.dto import AccountDetailsIn

bp = Blueprint("users", __name__)

account_schema = AccountSchema()
details_schema = AccountDetailsSchema()


@bp.get("/current-user")
@require_auth
@timing
def current_user_view():
    """Return the sanitized record of the authenticated account."""

    account = build_profile_service().current(current_account())
    response = json_response(account_schema.dump(account), message="User fetched successfully")
    return set_response_etag(response, account)


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    """Replace full name and email."""

    data = details_schema.load(request.get_json(silent=True) or request.form.to_dict())
    account = build_profile_service().update_details(
        AccountDetailsIn(
            account_id=current_account().id,
            fullname=data["fullname"],
            email=data["email"],
        )
    )
    response = json_response(
        account_schema.dump(account), message="Account details updated successfully"
    )
    return set_response_etag(response, account)


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    """Upload a new avatar image."""

    service = build_profile_service()
    with stash_uploads("avatar") as files:
        account = service.update_avatar(current_account().id, files["avatar"])
    response = json_response(account_schema.dump(account), message="Avatar updated successfully")
    return set_response_etag(response, account)


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    """Upload a new cover image."""

    service = build_profile_service()
    with stash_uploads("coverImage") as files:
        account = service.update_cover_image(current_account().id, files["coverImage"])
    response = json_response(
        account_schema.dump(account), message="Cover image updated successfully"
    )
    return set_response_etag(response, account)
