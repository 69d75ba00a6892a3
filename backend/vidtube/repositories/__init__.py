from .account import AccountRepository
from .base import BaseRepository

__all__ = ["AccountRepository", "BaseRepository"]
