"""Unit tests for the Account model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories.account import AccountFactory
from vidtube.models.account import Account


class TestAccountModel:
    def test_password_is_hashed_and_verifiable(self, session):
        account = AccountFactory(password="s3cret-pass")

        assert account.password_hash != "s3cret-pass"
        assert account.verify_password("s3cret-pass")
        assert not account.verify_password("wrong")
        assert not account.verify_password(None)

    def test_password_is_write_only(self, session):
        account = AccountFactory()
        with pytest.raises(AttributeError):
            _ = account.password

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            Account(password="")

    def test_username_and_email_are_normalized(self, session):
        account = AccountFactory(username="  MixedCase ", email=" Someone@Example.COM ")

        assert account.username == "mixedcase"
        assert account.email == "someone@example.com"

    @pytest.mark.parametrize("field", ["username", "email", "full_name", "avatar_url"])
    def test_blank_required_fields_rejected(self, field):
        with pytest.raises(ValueError):
            Account(**{field: "   "})

    def test_cover_image_defaults_to_empty_string(self, session):
        account = AccountFactory(cover_image_url=None)
        assert account.cover_image_url == ""

    def test_timestamps_are_set(self, session):
        account = AccountFactory()
        assert account.created_at is not None
        assert account.updated_at is not None

    def test_username_unique_constraint(self, session):
        AccountFactory(username="dup")
        with pytest.raises(IntegrityError):
            AccountFactory(username="DUP")
        session.rollback()

    def test_email_unique_constraint(self, session):
        AccountFactory(email="same@example.com")
        with pytest.raises(IntegrityError):
            AccountFactory(email="same@example.com")
        session.rollback()

    def test_repr_includes_id(self, session):
        account = AccountFactory()
        assert repr(account) == f"<Account id={account.id}>"
