"""Client for the external image host (Cloudinary-style signed uploads).

Only two calls are needed: upload an image and get back its public URL and
id, and destroy an image by id when the row that referenced it goes away.
"""

import hashlib
import logging
import time
from dataclasses import dataclass

import requests
from django.conf import settings

from community.exceptions import AssetHostError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Asset:
    url: str
    public_id: str


def is_configured():
    return bool(
        settings.ASSET_HOST_CLOUD_NAME
        and settings.ASSET_HOST_API_KEY
        and settings.ASSET_HOST_API_SECRET
    )


def sign(params, secret):
    """Signature over the sorted ``key=value`` pairs followed by the API secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1((to_sign + secret).encode("utf-8")).hexdigest()


def _endpoint(action):
    base = settings.ASSET_HOST_BASE_URL.rstrip("/")
    return f"{base}/{settings.ASSET_HOST_CLOUD_NAME}/image/{action}"


def _signed_payload(params):
    payload = dict(params)
    payload["api_key"] = settings.ASSET_HOST_API_KEY
    payload["signature"] = sign(params, settings.ASSET_HOST_API_SECRET)
    return payload


def validate_image(upload):
    """Reject uploads that are not an allowed image type or are too large."""
    content_type = getattr(upload, "content_type", "") or ""
    if content_type not in settings.IMAGE_CONTENT_TYPES:
        raise ValidationError("Only JPEG, PNG, GIF and WebP images are allowed.")
    if upload.size > settings.IMAGE_MAX_BYTES:
        raise ValidationError(
            f"Image must be at most {settings.IMAGE_MAX_BYTES // (1024 * 1024)} MB."
        )


def upload_image(upload, folder=None):
    """Upload ``upload`` (a Django UploadedFile) and return the hosted Asset."""
    validate_image(upload)
    if not is_configured():
        raise AssetHostError("Image uploads are not configured.")

    params = {
        "folder": folder or settings.ASSET_HOST_FOLDER,
        "timestamp": int(time.time()),
    }
    try:
        response = requests.post(
            _endpoint("upload"),
            data=_signed_payload(params),
            files={"file": (upload.name, upload.read(), upload.content_type)},
            timeout=settings.ASSET_HOST_TIMEOUT,
        )
        response.raise_for_status()
        body = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Image upload failed: %s", e)
        raise AssetHostError()

    url = body.get("secure_url") or body.get("url")
    public_id = body.get("public_id")
    if not url or not public_id:
        logger.error("Image host returned an incomplete response: %s", body)
        raise AssetHostError()

    logger.info("Uploaded image %s", public_id)
    return Asset(url=url, public_id=public_id)


def destroy_image(public_id):
    """
    Delete a hosted image. Returns True on success.

    Used for cleanup after the owning row is gone, so failures are logged
    and reported through the return value instead of raised.
    """
    if not public_id or not is_configured():
        return False
    params = {"public_id": public_id, "timestamp": int(time.time())}
    try:
        response = requests.post(
            _endpoint("destroy"),
            data=_signed_payload(params),
            timeout=settings.ASSET_HOST_TIMEOUT,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Failed to delete image %s: %s", public_id, e)
        return False
    logger.info("Deleted image %s", public_id)
    return True
