from .dto import AccountDetailsIn
from .service import ProfileService

__all__ = ["ProfileService", "AccountDetailsIn"]
