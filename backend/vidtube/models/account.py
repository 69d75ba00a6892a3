"""Account model: the single persisted entity of the service."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered user of the video-sharing service.

    Fields
    ------
    username : str
        Public handle. Stored trimmed and lower-cased; unique.
    email : str
        Contact/login email. Stored trimmed and lower-cased; unique.
    full_name : str
        Display name.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    avatar_url : str
        Hosted avatar image. Never empty.
    cover_image_url : str
        Hosted cover image, ``""`` when the account has none.
    refresh_token : str | None
        The only refresh token currently accepted for this account.
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(512), nullable=False)
    cover_image_url: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("username", name="uq_accounts_username"),
        UniqueConstraint("email", name="uq_accounts_email"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str | None) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash or not raw:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip().lower()

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        # Format is not checked here: presence is the only rule on email.
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        return value.strip().lower()

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return value.strip()

    @validates("avatar_url")
    def _require_avatar(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Avatar URL must not be empty.")
        return value

    @validates("cover_image_url")
    def _coerce_cover(self, key: str, value: str | None) -> str:
        return value or ""
