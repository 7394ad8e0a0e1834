"""Hosted image storage.

The write pipeline only depends on the ``MediaStore`` protocol; production uses
``CloudinaryMediaStore`` and tests substitute an in-memory fake.
"""

import logging
from pathlib import Path
from typing import Protocol

import cloudinary.exceptions
import cloudinary.uploader

from robostore.core.config import Settings
from robostore.core.errors import MediaStoreConfigError, UploadError

logger = logging.getLogger(__name__)

# Cloudinary destroy() results that mean the asset is gone
DELETED_RESULTS = {"ok", "not found"}


class MediaStore(Protocol):
    def upload(self, local_file_path: str | Path) -> dict: ...

    def delete(self, storage_handle: str) -> None: ...


class CloudinaryMediaStore:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str = "robotics_products"):
        self._credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }
        self.folder = folder

    def upload(self, local_file_path: str | Path) -> dict:
        """Upload one local file; returns ``{"url", "storage_handle"}``."""
        path = str(local_file_path)
        try:
            result = cloudinary.uploader.upload(
                path,
                folder=self.folder,
                resource_type="auto",
                **self._credentials,
            )
        except cloudinary.exceptions.AuthorizationRequired as e:
            raise UploadError(
                "Cloudinary authentication failed. Please check your API credentials.",
                auth_failed=True,
            ) from e
        except Exception as e:
            if getattr(e, "http_code", None) == 401:
                raise UploadError(
                    "Cloudinary authentication failed. Please check your API credentials.",
                    auth_failed=True,
                ) from e
            raise UploadError(f"Failed to upload image: {e}") from e

        if not result or not result.get("secure_url") or not result.get("public_id"):
            raise UploadError("Failed to upload image: Invalid response from Cloudinary")

        logger.info("Uploaded %s as %s", Path(path).name, result["public_id"])
        return {"url": result["secure_url"], "storage_handle": result["public_id"]}

    def delete(self, storage_handle: str) -> None:
        try:
            result = cloudinary.uploader.destroy(storage_handle, **self._credentials)
        except Exception as e:
            raise UploadError(f"Failed to delete image {storage_handle}: {e}") from e

        outcome = (result or {}).get("result")
        if outcome not in DELETED_RESULTS:
            raise UploadError(f"Failed to delete image {storage_handle}: {outcome}")


def build_media_store(settings: Settings) -> CloudinaryMediaStore:
    required = {
        "CLOUDINARY_CLOUD_NAME": settings.CLOUDINARY_CLOUD_NAME,
        "CLOUDINARY_API_KEY": settings.CLOUDINARY_API_KEY,
        "CLOUDINARY_API_SECRET": settings.CLOUDINARY_API_SECRET,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise MediaStoreConfigError(
            f"{', '.join(missing)} is not defined in environment variables"
        )

    return CloudinaryMediaStore(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        folder=settings.CLOUDINARY_FOLDER,
    )
