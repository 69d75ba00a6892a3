"""Account resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class AccountSchema(Schema):
    """Sanitized account representation (no password, no refresh token)."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    fullname = fields.String(required=True)
    avatar_url = fields.String(required=True, data_key="avatarUrl")
    cover_image_url = fields.String(required=True, data_key="coverImageUrl")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class AccountDetailsSchema(Schema):
    """Input payload for replacing full name and email."""

    class Meta:
        unknown = EXCLUDE

    fullname = fields.String(load_default=None)
    email = fields.String(load_default=None)
