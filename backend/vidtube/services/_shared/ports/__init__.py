"""
vidtube.services._shared.ports
==============================

Ports (hexagonal interfaces) the service layer depends on.

- :mod:`token_provider`: :class:`~.TokenProvider`, minting access/refresh
  tokens and decoding refresh tokens.
- :mod:`asset_uploader`: :class:`~.AssetUploader`, turning a local file into a
  hosted URL.

Concrete adapters live under ``vidtube.infra``.
"""

from __future__ import annotations

from .asset_uploader import AssetUploader, AssetUploadResult, StubAssetUploader
from .token_provider import InvalidTokenError, StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "InvalidTokenError",
    "StubTokenProvider",
    "AssetUploader",
    "AssetUploadResult",
    "StubAssetUploader",
]
