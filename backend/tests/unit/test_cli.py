"""Tests for the ``flask accounts`` command group."""

from __future__ import annotations

from tests.factories.account import AccountFactory
from vidtube.repositories.account import AccountRepository


def test_revoke_session_clears_refresh_token(app, session):
    account = AccountFactory(username="mallory")
    account.refresh_token = "active-refresh-token"
    session.commit()

    result = app.test_cli_runner().invoke(args=["accounts", "revoke-session", "Mallory"])

    assert result.exit_code == 0, result.output
    assert "Session revoked for 'mallory'" in result.output
    assert AccountRepository().get(account.id).refresh_token is None


def test_revoke_session_unknown_username(app):
    result = app.test_cli_runner().invoke(args=["accounts", "revoke-session", "ghost"])

    assert result.exit_code == 2
    assert "No account with username 'ghost'" in result.output
