"""Account repository: lookups, credential and refresh-token persistence."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from vidtube.models.account import Account
from vidtube.repositories.base import BaseRepository


def _normalize(value: str) -> str:
    return value.strip().lower()


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It never mints tokens or decides whether a token is acceptable; it only
    stores and clears the single refresh-token slot.
    """

    model = Account

    # ---------------------------- Whitelists ----------------------------

    def _filterable_fields(self):
        return {
            "username": Account.username,
            "email": Account.email,
            "refresh_token": Account.refresh_token,
        }

    def _updatable_fields(self):
        """Profile fields that may be replaced in place (not password/token)."""
        return {"full_name", "email", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> Account | None:
        """Fetch an account by username (case-insensitive)."""
        stmt = select(Account).where(Account.username == _normalize(username))
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email (case-insensitive)."""
        stmt = select(Account).where(Account.email == _normalize(email))
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def find_by_identifier(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
    ) -> Account | None:
        """Return the first account matching ANY of the supplied identifiers.

        Blank or missing identifiers are not part of the match.

        :param username: Candidate username, compared lower-cased.
        :param email: Candidate email, compared lower-cased.
        :returns: Matching account or ``None`` (also when nothing was supplied).
        :rtype: Account | None
        """
        clauses = []
        if username and username.strip():
            clauses.append(Account.username == _normalize(username))
        if email and email.strip():
            clauses.append(Account.email == _normalize(email))
        if not clauses:
            return None
        stmt = select(Account).where(or_(*clauses)).order_by(Account.id.asc())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def exists_by_identity(self, *, username: str, email: str) -> bool:
        """Return ``True`` when the username OR the email is already taken."""
        stmt = (
            select(Account.id)
            .where(
                or_(
                    Account.username == _normalize(username),
                    Account.email == _normalize(email),
                )
            )
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Refresh-token slot ----------------------------

    def set_refresh_token(self, account: Account, token: str) -> None:
        """Overwrite the stored refresh token (last write wins)."""
        account.refresh_token = token
        self.flush()

    def clear_refresh_token(self, account_id: int) -> int:
        """Clear the stored refresh token with a single ``UPDATE``.

        :returns: Number of rows touched (``0`` for an unknown id).
        :rtype: int
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(refresh_token=None)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    # ---------------------------- Password ops ----------------------------

    def update_password(self, account: Account, new_password: str) -> None:
        """Replace the password hash; the model setter does the hashing."""
        account.password = new_password
        self.flush()
