"""
ProfileService
==============

Reads and in-place mutations of the authenticated account: details, avatar
and cover image. Identity and stashed file paths arrive as explicit
parameters; this module never touches the request.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.models.account import Account
from vidtube.services._shared.base import BaseService, ServiceContext, is_blank
from vidtube.services._shared.errors import (
    ConflictError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from vidtube.services._shared.ports.asset_uploader import AssetUploader
from vidtube.services.auth.dto import AccountOut
from vidtube.services.auth.service import is_identity_conflict
from vidtube.services.profile.dto import AccountDetailsIn

log = logging.getLogger(__name__)


class ProfileService(BaseService):
    """Application service for the authenticated account's profile."""

    def __init__(
        self,
        *,
        asset_uploader: AssetUploader,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.uploader = asset_uploader

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def current(self, account: Account) -> AccountOut:
        """Map the identity resolved by the auth gate; no store access."""
        return AccountOut.from_model(account)

    # --------------------------------------------------------------------- #
    # Details
    # --------------------------------------------------------------------- #

    def update_details(self, dto: AccountDetailsIn) -> AccountOut:
        """
        Replace full name and email in place.

        :raises ValidationError: Either field blank.
        :raises NotFoundError: Unknown account id.
        :raises ConflictError: Email already owned by another account.
        """
        self.ensure_present({"fullname": dto.fullname, "email": dto.email})

        with self.rw_uow() as uow:
            repo = uow.accounts
            account = repo.get(dto.account_id)
            if account is None:
                raise NotFoundError()
            try:
                repo.assign_updates(account, {"full_name": dto.fullname, "email": dto.email})
            except IntegrityError as exc:
                if is_identity_conflict(exc):
                    raise ConflictError("Email is already in use") from exc
                raise
            out = AccountOut.from_model(account)

        log.info("profile.update_details", extra={"account_id": dto.account_id})
        return out

    # --------------------------------------------------------------------- #
    # Images
    # --------------------------------------------------------------------- #

    def update_avatar(self, account_id: int, local_path: str | None) -> AccountOut:
        """
        Upload a new avatar and replace ``avatar_url``.

        :raises ValidationError: No file supplied.
        :raises UploadError: The uploader produced no URL.
        :raises NotFoundError: Unknown account id.
        """
        return self._replace_image(
            account_id,
            local_path,
            field="avatar_url",
            missing="Avatar file is missing",
            failed="Error while uploading avatar",
        )

    def update_cover_image(self, account_id: int, local_path: str | None) -> AccountOut:
        """Upload a new cover image and replace ``cover_image_url``."""
        return self._replace_image(
            account_id,
            local_path,
            field="cover_image_url",
            missing="Cover image file is missing",
            failed="Error while uploading cover image",
        )

    def _replace_image(
        self,
        account_id: int,
        local_path: str | None,
        *,
        field: str,
        missing: str,
        failed: str,
    ) -> AccountOut:
        if is_blank(local_path):
            raise ValidationError(missing)

        uploaded = self.uploader.upload(local_path)
        if uploaded is None:
            raise UploadError(failed)

        with self.rw_uow() as uow:
            repo = uow.accounts
            account = repo.get(account_id)
            if account is None:
                raise NotFoundError()
            repo.assign_updates(account, {field: uploaded.url})
            out = AccountOut.from_model(account)

        log.info("profile.%s", field, extra={"account_id": account_id})
        return out
