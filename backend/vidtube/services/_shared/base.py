# vidtube/services/_shared/base.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from vidtube.services._shared.errors import ValidationError
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated account identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


def is_blank(value: Any) -> bool:
    """Return ``True`` for ``None`` and for strings that are empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide the read-write Unit of Work helper.
    * Offer shared input checks that raise service errors.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (actor, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_present(self, fields: Mapping[str, Any], *, message: str | None = None) -> None:
        """
        Require every field to be present and non-blank.

        :param fields: Public field name -> supplied value.
        :param message: Override for the error message.
        :raises ValidationError: Naming the blank fields in ``errors``.
        """
        blank = [name for name, value in fields.items() if is_blank(value)]
        if blank:
            raise ValidationError(message, errors={name: ["Field is required."] for name in blank})
