from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class AssetUploadResult:
    """
    Outcome of a successful upload.

    :param url: Publicly reachable URL of the hosted asset.
    :param public_id: Provider-side identifier, when reported.
    :param resource_type: Provider resource kind (``image``...), when reported.
    :param bytes: Stored size in bytes, when reported.
    """

    url: str
    public_id: str | None = None
    resource_type: str | None = None
    bytes: int | None = None


class AssetUploader(Protocol):
    """Port turning a local file into a hosted asset.

    ``upload`` returns ``None`` instead of raising when the file is missing or
    the upload fails; callers decide what an absent URL means.
    """

    def upload(self, local_path: str | None) -> AssetUploadResult | None: ...


class StubAssetUploader(AssetUploader):
    """In-memory uploader used in tests; records every successful upload."""

    def __init__(self, *, base_url: str = "https://assets.test/image/upload") -> None:
        self.base_url = base_url.rstrip("/")
        self.fail = False
        self.uploads: list[str] = []

    def upload(self, local_path: str | None) -> AssetUploadResult | None:
        if self.fail or not local_path or not os.path.isfile(local_path):
            return None
        self.uploads.append(local_path)
        name = os.path.basename(local_path)
        return AssetUploadResult(
            url=f"{self.base_url}/v{len(self.uploads)}/{name}",
            public_id=os.path.splitext(name)[0],
            resource_type="image",
            bytes=os.path.getsize(local_path),
        )
