"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never import Flask. Each
kind carries the HTTP status and the stable machine code it maps to, and the
translation into the response envelope happens in ``vidtube/core/errors.py``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message; SQLite reports the
    offending ``table.column``, so callers may pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (``uq_accounts_email``) or column (``accounts.email``).

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Human-readable summary, safe to show to clients.
    :param errors: Optional structured details (e.g. offending fields).
    """

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, *, errors: Any = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Missing or blank required input."""

    status_code = 400
    code = "validation_error"
    default_message = "All fields are required"


class ConflictError(ServiceError):
    """A unique field (username, email) is already taken."""

    status_code = 409
    code = "conflict"
    default_message = "User already exists"


class NotFoundError(ServiceError):
    """No account matches the lookup."""

    status_code = 404
    code = "not_found"
    default_message = "User does not exist"


class AuthError(ServiceError):
    """Bad credentials or a bad, expired or mismatched token."""

    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized request"


class UploadError(ServiceError):
    """The asset uploader produced no usable URL."""

    status_code = 400
    code = "upload_failed"
    default_message = "Error while uploading file"


class InternalError(ServiceError):
    """Store-level failure or an unexpected lower-level failure."""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"
