from vidtube.models.account import Account

__all__ = ["Account"]
