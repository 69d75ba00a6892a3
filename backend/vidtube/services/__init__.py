"""Service layer public API.

Callers import from :mod:`vidtube.services` without knowing internal structure.
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth import (
    AccountOut,
    AuthService,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
)
from .profile import AccountDetailsIn, ProfileService

__all__ = [
    "BaseService",
    "ServiceContext",
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "ChangePasswordIn",
    "AccountOut",
    "TokenPairOut",
    "LoginOut",
    "ProfileService",
    "AccountDetailsIn",
]
