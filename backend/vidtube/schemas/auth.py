"""Authentication-related Marshmallow schemas.

Input schemas only check types; presence and blankness are service rules so
that callers get the same ``All fields are required`` answer whatever the
transport.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .account import AccountSchema


class RegisterSchema(Schema):
    """Multipart form fields for account registration."""

    class Meta:
        unknown = EXCLUDE

    fullname = fields.String(load_default=None)
    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class LoginSchema(Schema):
    """Input payload for authenticating with username and/or email."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class RefreshSchema(Schema):
    """Body fallback when the ``refreshToken`` cookie is absent."""

    class Meta:
        unknown = EXCLUDE

    # Type is checked by AuthService.refresh.
    refresh_token = fields.Raw(load_default=None, data_key="refreshToken")


class ChangePasswordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(load_default=None, data_key="oldPassword")
    new_password = fields.String(load_default=None, data_key="newPassword")


class TokenPairSchema(Schema):
    """Response payload carrying both tokens."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class LoginResponseSchema(TokenPairSchema):
    """Response payload for a successful login: record plus tokens."""

    user = fields.Nested(AccountSchema, required=True)
