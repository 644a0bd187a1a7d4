"""
Product image storage on Cloudinary.

Credentials come from CLOUDINARY_URL or from the three
CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET
variables. Uploads land in CLOUDINARY_FOLDER (default
`alma_jesus/productos`) under a public id `alma_jesus/<millis>_<filename>`.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, Optional

import cloudinary
import cloudinary.uploader

from inventario.utils.identifiers import epoch_millis

logger = logging.getLogger(__name__)


class MediaNotConfigured(RuntimeError):
    pass


class MediaUploadError(RuntimeError):
    pass


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logger.warning("Ignoring non-integer %s", name)
        return default


def _cloudinary_config() -> Optional[dict]:
    if os.getenv("CLOUDINARY_URL", "").strip():
        # The SDK reads CLOUDINARY_URL itself.
        return {}
    cloud_name = os.getenv("CLOUDINARY_CLOUD_NAME", "").strip()
    api_key = os.getenv("CLOUDINARY_API_KEY", "").strip()
    api_secret = os.getenv("CLOUDINARY_API_SECRET", "").strip()
    if not (cloud_name and api_key and api_secret):
        return None
    return {"cloud_name": cloud_name, "api_key": api_key, "api_secret": api_secret}


def is_configured() -> bool:
    return _cloudinary_config() is not None


def _with_retry(fn: Callable[[], dict], retries: int) -> dict:
    last_exc: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except Exception as exc:
            last_exc = exc
            if attempt < retries:
                time.sleep(min(0.2 * (attempt + 1), 1.0))
    raise MediaUploadError(str(last_exc)) from last_exc


def public_id_for(filename: str) -> str:
    return f"alma_jesus/{epoch_millis()}_{filename}"


def upload_image(file_bytes: bytes, filename: str) -> str:
    """Upload raw image bytes and return the HTTPS url of the stored asset."""
    config = _cloudinary_config()
    if config is None:
        raise MediaNotConfigured("Cloudinary no esta configurado")
    if config:
        cloudinary.config(secure=True, **config)

    retries = max(_int_env("CLOUDINARY_UPLOAD_RETRIES", 1), 0)
    public_id = public_id_for(filename)
    folder = os.getenv("CLOUDINARY_FOLDER", "alma_jesus/productos")

    try:
        result = _with_retry(
            lambda: cloudinary.uploader.upload(file_bytes, public_id=public_id, folder=folder),
            retries,
        )
    except MediaUploadError as exc:
        logger.warning("Cloudinary upload failed", extra={"error": str(exc), "public_id": public_id})
        raise

    url = result.get("secure_url")
    if not url:
        raise MediaUploadError("Cloudinary no devolvio secure_url")
    logger.info("Uploaded product image %s", public_id)
    return url
