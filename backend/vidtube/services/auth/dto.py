# vidtube/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidtube.models.account import Account

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param fullname: Display name.
    :param username: Public handle (lower-cased by the model).
    :param email: Contact/login email.
    :param password: Raw password, hashed by the model.
    :param avatar_path: Local path of the stashed avatar file.
    :param cover_image_path: Local path of the stashed cover image, if any.
    """

    fullname: str | None
    username: str | None
    email: str | None
    password: str | None
    avatar_path: str | None = None
    cover_image_path: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one identifier plus the password.
    """

    password: str | None
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT (cookie or body).
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    account_id: int
    old_password: str | None
    new_password: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Sanitized account record: never carries password hash nor refresh token.
    """

    id: int
    username: str
    email: str
    fullname: str
    avatar_url: str
    cover_image_url: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, account: Account) -> AccountOut:
        return cls(
            id=account.id,
            username=account.username,
            email=account.email,
            fullname=account.full_name,
            avatar_url=account.avatar_url,
            cover_image_url=account.cover_image_url or "",
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    account: AccountOut
    tokens: TokenPairOut
