# vidtube/services/profile/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AccountDetailsIn:
    """
    Input DTO for replacing the editable account details.

    :param account_id: Authenticated account.
    :param fullname: New display name (required).
    :param email: New email (required).
    """

    account_id: int
    fullname: str | None
    email: str | None
