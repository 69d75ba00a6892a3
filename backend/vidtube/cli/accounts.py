"""Flask CLI commands for account session administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from vidtube.repositories.account import AccountRepository
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


@click.group("accounts")
def accounts_cli() -> None:
    """Account administration commands."""


@accounts_cli.command("revoke-session")
@click.argument("username")
@with_appcontext
def revoke_session(username: str) -> None:
    """Clear the stored refresh token of USERNAME.

    The account must log in again once its current access token expires.
    """
    with SQLAlchemyUnitOfWork() as uow:
        repo: AccountRepository = uow.accounts
        account = repo.get_by_username(username)
        if account is None:
            raise click.UsageError(f"No account with username '{username}'.")
        repo.clear_refresh_token(account.id)
    LOGGER.info("accounts.revoke_session", extra={"account_id": account.id})
    click.echo(f"Session revoked for '{account.username}'.")
