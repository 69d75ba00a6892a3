from .http_asset_uploader import HTTPAssetUploader

__all__ = ["HTTPAssetUploader"]
