# vidtube/services/auth/service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from vidtube.models.account import Account
from vidtube.services._shared.base import BaseService, ServiceContext, is_blank
from vidtube.services._shared.errors import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    UploadError,
    ValidationError,
    violates,
)
from vidtube.services._shared.ports.asset_uploader import AssetUploader
from vidtube.services._shared.ports.token_provider import InvalidTokenError, TokenProvider
from vidtube.services.auth.dto import (
    AccountOut,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
)
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

REFRESH_TOKEN_TYPE = "refresh"

# PostgreSQL reports the constraint name, SQLite the table.column.
_UNIQUE_IDENTITY_MARKERS = (
    "uq_accounts_username",
    "uq_accounts_email",
    "accounts.username",
    "accounts.email",
)


def is_identity_conflict(exc: IntegrityError) -> bool:
    """Return ``True`` when ``exc`` comes from the username/email unique constraints."""
    return any(violates(exc, marker) for marker in _UNIQUE_IDENTITY_MARKERS)


class AuthService(BaseService):
    """
    Credential and session lifecycle (register / login / logout / refresh /
    change password).

    Session state lives in a single slot on the account: login and refresh
    overwrite it, logout clears it, and a refresh token is only accepted when
    it equals the stored value.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        asset_uploader: AssetUploader,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param token_provider: Adapter minting access/refresh tokens.
        :param asset_uploader: Adapter hosting avatar and cover images.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.uploader = asset_uploader

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AccountOut:
        """
        Create an account with a hosted avatar (and optional cover image).

        :param dto: Registration input with stashed file paths.
        :returns: Sanitized record of the new account.
        :raises ValidationError: Blank required field or missing avatar file.
        :raises ConflictError: Username or email already taken.
        :raises UploadError: Avatar upload produced no URL.
        :raises InternalError: The new record could not be read back.
        """
        self.ensure_present(
            {
                "fullname": dto.fullname,
                "username": dto.username,
                "email": dto.email,
                "password": dto.password,
            }
        )

        with self.rw_uow() as uow:
            if uow.accounts.exists_by_identity(username=dto.username, email=dto.email):
                raise ConflictError("User with this email or username already exists")

        if is_blank(dto.avatar_path):
            raise ValidationError("Avatar file is required", errors={"avatar": ["File is required."]})

        avatar = self.uploader.upload(dto.avatar_path)
        if avatar is None:
            raise UploadError("Error while uploading avatar")

        # A failed cover upload is not fatal; the account simply has no cover.
        cover = self.uploader.upload(dto.cover_image_path) if dto.cover_image_path else None

        with self.rw_uow() as uow:
            repo = uow.accounts
            try:
                account = repo.add(
                    Account(
                        full_name=dto.fullname,
                        username=dto.username,
                        email=dto.email,
                        password=dto.password,
                        avatar_url=avatar.url,
                        cover_image_url=cover.url if cover else "",
                    )
                )
            except IntegrityError as exc:
                if is_identity_conflict(exc):
                    raise ConflictError("User with this email or username already exists") from exc
                raise

            created = repo.get(account.id)
            if created is None:
                raise InternalError("Something went wrong while registering the user")
            out = AccountOut.from_model(created)

        log.info("auth.register", extra={"account_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and open a session.

        :param dto: Login input (username and/or email, plus password).
        :returns: Sanitized record plus a fresh token pair.
        :raises ValidationError: No identifier or no password.
        :raises NotFoundError: No account matches any identifier.
        :raises AuthError: Wrong password.
        :raises InternalError: Token generation or persistence failed.
        """
        if (is_blank(dto.username) and is_blank(dto.email)) or is_blank(dto.password):
            raise ValidationError("Username or email and password are required")

        with self.rw_uow() as uow:
            account = uow.accounts.find_by_identifier(username=dto.username, email=dto.email)
            if account is None:
                raise NotFoundError()
            if not account.verify_password(dto.password):
                log.warning("auth.login.bad_password", extra={"account_id": account.id})
                raise AuthError("Invalid user credentials")

            tokens = self._issue_tokens(uow, account)
            out = LoginOut(account=AccountOut.from_model(account), tokens=tokens)

        log.info("auth.login", extra={"account_id": out.account.id})
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, account_id: int) -> None:
        """
        Clear the stored refresh token. Idempotent, also for unknown ids.
        """
        with self.rw_uow() as uow:
            uow.accounts.clear_refresh_token(account_id)
        log.info("auth.logout", extra={"account_id": account_id})

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate the session: accept the stored refresh token once, issue a new pair.

        Concurrent refreshes with the same token are not serialized; the last
        write wins and earlier pairs stop refreshing.

        :raises AuthError: Missing, malformed, expired, wrong-type, unknown
            subject, or a token that no longer equals the stored one.
        """
        if not isinstance(dto.refresh_token, str) or is_blank(dto.refresh_token):
            raise AuthError("Unauthorized request")

        try:
            claims = self.tokens.decode_refresh_token(dto.refresh_token)
        except InvalidTokenError as exc:
            log.warning("auth.refresh.rejected reason=%s", exc)
            raise AuthError("Invalid refresh token") from exc

        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise AuthError("Invalid refresh token")
        account_id = self._coerce_account_id(claims.get("sub"))

        with self.rw_uow() as uow:
            account = uow.accounts.get(account_id)
            if account is None:
                log.warning("auth.refresh.unknown_account", extra={"account_id": account_id})
                raise AuthError("Invalid refresh token")
            if account.refresh_token != dto.refresh_token:
                log.warning("auth.refresh.stale_token", extra={"account_id": account_id})
                raise AuthError("Refresh token is expired or used")

            tokens = self._issue_tokens(uow, account)

        log.info("auth.refresh", extra={"account_id": account_id})
        return tokens

    # ------------------------------------------------------------------ #
    # Change password
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password hash after verifying the old password.

        The stored refresh token is left untouched.
        """
        self.ensure_present({"oldPassword": dto.old_password, "newPassword": dto.new_password})

        with self.rw_uow() as uow:
            account = uow.accounts.get(dto.account_id)
            if account is None:
                raise NotFoundError()
            if not account.verify_password(dto.old_password):
                raise AuthError("Invalid old password")
            uow.accounts.update_password(account, dto.new_password)

        log.info("auth.change_password", extra={"account_id": dto.account_id})

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_tokens(self, uow: SQLAlchemyUnitOfWork, account: Account) -> TokenPairOut:
        """Mint a pair and overwrite the stored refresh token inside ``uow``."""
        claims: dict[str, Any] = {
            "username": account.username,
            "email": account.email,
            "fullname": account.full_name,
        }
        try:
            access = self.tokens.create_access_token(
                identity=str(account.id),
                additional_claims=claims,
            )
            refresh = self.tokens.create_refresh_token(identity=str(account.id))
            uow.accounts.set_refresh_token(account, refresh)
        except ServiceError:
            raise
        except Exception as exc:
            raise InternalError(
                "Something went wrong while generating refresh and access token"
            ) from exc
        return TokenPairOut(access_token=access, refresh_token=refresh)

    @staticmethod
    def _coerce_account_id(subject: Any) -> int:
        """Ensure the token subject can be treated as an integer account id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise AuthError("Invalid refresh token")
