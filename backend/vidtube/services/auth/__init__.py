from .dto import AccountOut, ChangePasswordIn, LoginIn, LoginOut, RefreshIn, RegisterIn, TokenPairOut
from .service import AuthService

__all__ = [
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "ChangePasswordIn",
    "AccountOut",
    "TokenPairOut",
    "LoginOut",
]
