"""HTTP adapter for the image-hosting API (Cloudinary-compatible signed upload)."""

from __future__ import annotations

import hashlib
import logging
import os
import time
from collections.abc import Mapping
from typing import Any

import requests

from vidtube.services._shared.ports import AssetUploader, AssetUploadResult

log = logging.getLogger(__name__)


def sign_params(params: Mapping[str, Any], api_secret: str) -> str:
    """Return the SHA-1 signature of ``params`` sorted by key plus the secret.

    Empty values are left out of the signed string.
    """
    to_sign = "&".join(f"{k}={v}" for k, v in sorted(params.items()) if v not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class HTTPAssetUploader(AssetUploader):
    """Upload local files with a signed multipart POST.

    Every failure (missing file, transport error, timeout, non-2xx reply,
    reply without a URL) is logged and reported as ``None``. Nothing retries.
    """

    def __init__(
        self,
        upload_url: str,
        api_key: str,
        api_secret: str,
        *,
        folder: str = "",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.upload_url = upload_url
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> HTTPAssetUploader:
        return cls(
            config["ASSET_UPLOAD_URL"],
            config["ASSET_UPLOAD_API_KEY"],
            config["ASSET_UPLOAD_API_SECRET"],
            folder=config.get("ASSET_UPLOAD_FOLDER", ""),
            timeout=float(config.get("ASSET_UPLOAD_TIMEOUT", 30)),
        )

    def upload(self, local_path: str | None) -> AssetUploadResult | None:
        if not local_path or not os.path.isfile(local_path):
            return None
        if not self.upload_url:
            log.error("asset upload skipped: ASSET_UPLOAD_URL is not configured")
            return None

        params: dict[str, Any] = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder
        data = dict(params, api_key=self.api_key, signature=sign_params(params, self.api_secret))

        try:
            with open(local_path, "rb") as fh:
                response = self.session.post(
                    self.upload_url,
                    data=data,
                    files={"file": (os.path.basename(local_path), fh)},
                    timeout=self.timeout,
                )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("asset upload failed path=%s error=%s", local_path, exc)
            return None

        if not isinstance(body, dict):
            log.warning("asset upload returned an unexpected body path=%s", local_path)
            return None
        url = body.get("secure_url") or body.get("url")
        if not url:
            log.warning("asset upload returned no url path=%s", local_path)
            return None
        return AssetUploadResult(
            url=url,
            public_id=body.get("public_id"),
            resource_type=body.get("resource_type"),
            bytes=body.get("bytes"),
        )
