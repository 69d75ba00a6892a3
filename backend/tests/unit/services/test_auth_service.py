# tests/unit/services/test_auth_service.py
from __future__ import annotations

import itertools
from datetime import timedelta

import pytest
from sqlalchemy import func, select

from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from vidtube.core.extensions import db
from vidtube.models.account import Account
from vidtube.repositories.account import AccountRepository
from vidtube.services._shared.errors import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from vidtube.services._shared.ports import StubAssetUploader, StubTokenProvider
from vidtube.services.auth.dto import (
    AccountOut,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
)
from vidtube.services.auth.service import AuthService

REQUIRED_FIELDS = ("fullname", "username", "email", "password")


class ExplodingTokenProvider(StubTokenProvider):
    def create_refresh_token(self, *, identity):
        raise RuntimeError("signing backend unavailable")


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def service(app, tokens, uploader) -> AuthService:
    """AuthService wired to in-memory doubles."""
    return AuthService(token_provider=tokens, asset_uploader=uploader)


@pytest.fixture()
def register_in(image_file):
    def _make(**overrides) -> RegisterIn:
        data = {
            "fullname": "Ada Lovelace",
            "username": "Ada",
            "email": "ada@example.com",
            "password": "analytical",
            "avatar_path": str(image_file("avatar.png")),
            "cover_image_path": None,
        }
        data.update(overrides)
        return RegisterIn(**data)

    return _make


def _stored_token(account_id: int) -> str | None:
    return AccountRepository().get(account_id).refresh_token


# ------------------------------ Register ---------------------------------- #
class TestRegister:
    def test_creates_sanitized_account(self, service, register_in, uploader):
        out = service.register(register_in())

        assert isinstance(out, AccountOut)
        assert out.username == "ada"
        assert out.email == "ada@example.com"
        assert out.fullname == "Ada Lovelace"
        assert out.avatar_url.endswith("avatar.png")
        assert out.cover_image_url == ""
        assert not hasattr(out, "password_hash")
        assert not hasattr(out, "refresh_token")
        assert len(uploader.uploads) == 1

        stored = AccountRepository().get(out.id)
        assert stored.verify_password("analytical")
        assert stored.refresh_token is None

    def test_uploads_cover_image_when_present(self, service, register_in, image_file):
        out = service.register(register_in(cover_image_path=str(image_file("cover.png"))))
        assert out.cover_image_url.endswith("cover.png")

    def test_failed_cover_upload_stores_empty_string(self, service, register_in, tmp_path):
        out = service.register(register_in(cover_image_path=str(tmp_path / "gone.png")))
        assert out.cover_image_url == ""

    @pytest.mark.parametrize(
        "blank",
        [
            combo
            for size in range(1, len(REQUIRED_FIELDS) + 1)
            for combo in itertools.combinations(REQUIRED_FIELDS, size)
        ],
        ids="-".join,
    )
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_fields_rejected(self, service, register_in, uploader, blank, value):
        with pytest.raises(ValidationError) as exc_info:
            service.register(register_in(**{name: value for name in blank}))

        assert exc_info.value.message == "All fields are required"
        assert set(exc_info.value.errors) == set(blank)
        assert uploader.uploads == []
        assert db.session.scalar(select(func.count()).select_from(Account)) == 0

    @pytest.mark.parametrize(
        "clash",
        [{"username": "ADA", "email": "other@example.com"}, {"username": "other"}],
    )
    def test_duplicate_username_or_email_conflicts(self, service, register_in, uploader, clash):
        AccountFactory(username="ada", email="ada@example.com")

        with pytest.raises(ConflictError):
            service.register(register_in(**clash))
        assert uploader.uploads == []

    def test_missing_avatar_rejected(self, service, register_in):
        with pytest.raises(ValidationError):
            service.register(register_in(avatar_path=None))

    def test_failed_avatar_upload_rejected(self, service, register_in, uploader):
        uploader.fail = True
        with pytest.raises(UploadError):
            service.register(register_in())
        assert AccountRepository().get_by_username("ada") is None


# -------------------------------- Login ----------------------------------- #
class TestLogin:
    def test_login_issues_pair_and_stores_refresh_token(self, service):
        account = AccountFactory(username="grace")

        out = service.login(LoginIn(username="Grace", password=DEFAULT_PASSWORD))

        assert isinstance(out, LoginOut)
        assert out.account.id == account.id
        assert out.tokens.access_token.startswith("access.")
        assert out.tokens.refresh_token.startswith("refresh.")
        assert _stored_token(account.id) == out.tokens.refresh_token

    def test_access_token_carries_profile_claims(self, service, tokens):
        account = AccountFactory(username="grace", email="grace@example.com", full_name="Grace H")

        out = service.login(LoginIn(email="grace@example.com", password=DEFAULT_PASSWORD))

        claims = tokens._issued[out.tokens.access_token]
        assert claims["sub"] == str(account.id)
        assert claims["username"] == "grace"
        assert claims["email"] == "grace@example.com"
        assert claims["fullname"] == "Grace H"

    def test_second_login_replaces_stored_token(self, service):
        account = AccountFactory()
        first = service.login(LoginIn(email=account.email, password=DEFAULT_PASSWORD))
        second = service.login(LoginIn(email=account.email, password=DEFAULT_PASSWORD))

        assert first.tokens.refresh_token != second.tokens.refresh_token
        assert _stored_token(account.id) == second.tokens.refresh_token

    @pytest.mark.parametrize(
        "dto",
        [
            LoginIn(password=DEFAULT_PASSWORD),
            LoginIn(username="grace", password=None),
            LoginIn(username="grace", password="  "),
            LoginIn(username=" ", email="", password=DEFAULT_PASSWORD),
        ],
    )
    def test_requires_identifier_and_password(self, service, dto):
        AccountFactory(username="grace")
        with pytest.raises(ValidationError):
            service.login(dto)

    def test_unknown_account(self, service):
        with pytest.raises(NotFoundError):
            service.login(LoginIn(username="nobody", password="x"))

    def test_wrong_password_keeps_stored_token(self, service):
        account = AccountFactory()
        pair = service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        with pytest.raises(AuthError):
            service.login(LoginIn(username=account.username, password="wrong"))

        assert _stored_token(account.id) == pair.tokens.refresh_token

    def test_token_failure_is_internal_error(self, app, uploader):
        service = AuthService(token_provider=ExplodingTokenProvider(), asset_uploader=uploader)
        account = AccountFactory()

        with pytest.raises(InternalError):
            service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        assert _stored_token(account.id) is None


# ------------------------------- Logout ----------------------------------- #
class TestLogout:
    def test_logout_clears_stored_token(self, service):
        account = AccountFactory()
        service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        service.logout(account.id)

        assert _stored_token(account.id) is None

    def test_logout_is_idempotent(self, service):
        account = AccountFactory()
        service.logout(account.id)
        service.logout(account.id)
        service.logout(424242)
        assert _stored_token(account.id) is None

    def test_refresh_after_logout_rejected(self, service):
        account = AccountFactory()
        pair = service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))
        service.logout(account.id)

        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=pair.tokens.refresh_token))


# ------------------------------- Refresh ---------------------------------- #
class TestRefresh:
    def test_refresh_rotates_and_rejects_old_token(self, service):
        account = AccountFactory()
        pair1 = service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        pair2 = service.refresh(RefreshIn(refresh_token=pair1.tokens.refresh_token))
        assert isinstance(pair2, TokenPairOut)
        assert pair2.refresh_token != pair1.tokens.refresh_token
        assert _stored_token(account.id) == pair2.refresh_token

        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=pair1.tokens.refresh_token))
        assert _stored_token(account.id) == pair2.refresh_token

    @pytest.mark.parametrize("token", [None, "", "   ", "garbage", 12345, ["a"]])
    def test_missing_or_malformed_token(self, service, token):
        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=token))

    def test_access_token_is_not_a_refresh_token(self, service):
        account = AccountFactory()
        pair = service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=pair.tokens.access_token))

    def test_expired_token_rejected(self, app, uploader):
        tokens = StubTokenProvider(refresh_expires=timedelta(seconds=-1))
        service = AuthService(token_provider=tokens, asset_uploader=uploader)
        account = AccountFactory()
        pair = service.login(LoginIn(username=account.username, password=DEFAULT_PASSWORD))

        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=pair.tokens.refresh_token))
        assert _stored_token(account.id) == pair.tokens.refresh_token

    def test_unknown_account_rejected(self, service, tokens):
        token = tokens.create_refresh_token(identity=987654)
        with pytest.raises(AuthError):
            service.refresh(RefreshIn(refresh_token=token))


# --------------------------- Change password ------------------------------ #
class TestChangePassword:
    def test_changes_hash_and_keeps_session(self, service):
        account = AccountFactory(password="old-pass")
        pair = service.login(LoginIn(username=account.username, password="old-pass"))

        service.change_password(
            ChangePasswordIn(account_id=account.id, old_password="old-pass", new_password="new-pass")
        )

        stored = AccountRepository().get(account.id)
        assert stored.verify_password("new-pass")
        assert not stored.verify_password("old-pass")
        assert stored.refresh_token == pair.tokens.refresh_token

    def test_wrong_old_password(self, service):
        account = AccountFactory(password="old-pass")
        with pytest.raises(AuthError):
            service.change_password(
                ChangePasswordIn(account_id=account.id, old_password="nope", new_password="x")
            )
        assert AccountRepository().get(account.id).verify_password("old-pass")

    @pytest.mark.parametrize("old,new", [(None, "x"), ("old-pass", ""), (" ", " ")])
    def test_both_passwords_required(self, service, old, new):
        account = AccountFactory(password="old-pass")
        with pytest.raises(ValidationError):
            service.change_password(
                ChangePasswordIn(account_id=account.id, old_password=old, new_password=new)
            )

    def test_unknown_account(self, service):
        with pytest.raises(NotFoundError):
            service.change_password(
                ChangePasswordIn(account_id=31337, old_password="a", new_password="b")
            )
