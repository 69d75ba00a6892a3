"""Convenience exports for application schemas."""

from __future__ import annotations

from .account import AccountDetailsSchema, AccountSchema
from .auth import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)

__all__ = [
    "AccountSchema",
    "AccountDetailsSchema",
    "RegisterSchema",
    "LoginSchema",
    "RefreshSchema",
    "ChangePasswordSchema",
    "TokenPairSchema",
    "LoginResponseSchema",
]
