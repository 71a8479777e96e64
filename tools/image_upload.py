"""Image hosting proxy: push uploaded photos to Cloudinary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from assistant_app.config import AppConfig
from logic.errors import UploadError
from logic.photo_data import to_data_uri
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

UploadFn = Callable[..., Dict[str, Any]]


@dataclass
class UploadResult:
    image_url: str
    public_id: str


class CloudinaryUploader:
    """Uploads image bytes as a data URI into a fixed Cloudinary folder."""

    def __init__(self, config: AppConfig, upload_fn: Optional[UploadFn] = None) -> None:
        self.config = config
        self.folder = config.upload_folder
        self._upload_fn = upload_fn or cloudinary.uploader.upload
        if upload_fn is None:
            cloudinary.config(
                cloud_name=config.cloudinary_cloud_name,
                api_key=config.cloudinary_api_key,
                api_secret=config.cloudinary_api_secret,
                secure=True,
            )

    @instrument_tool("upload_image")
    def upload(self, data: bytes, mime_type: str) -> UploadResult:
        if not data:
            raise UploadError("No image file provided.")
        try:
            result = self._upload_fn(to_data_uri(data, mime_type), folder=self.folder)
        except CloudinaryError as exc:
            LOGGER.error("Cloudinary upload failed", extra={"error": str(exc)})
            raise UploadError(f"Image upload failed: {exc}") from exc

        image_url = result.get("secure_url") or result.get("url")
        public_id = result.get("public_id")
        if not image_url or not public_id:
            raise UploadError("Image upload failed: the image host returned no URL.")
        return UploadResult(image_url=str(image_url), public_id=str(public_id))


__all__ = ["CloudinaryUploader", "UploadResult"]
