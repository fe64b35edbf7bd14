"""Storage service for uploaded media (local filesystem under MEDIA_ROOT)."""

import logging
import os
import re
from datetime import datetime, timezone
from typing import BinaryIO

from surrogacy_admin.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "heic"}
ALLOWED_IMAGE_MIME_TYPES = {
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
    "image/heic",
}
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]+")


class UploadRejectedError(ValueError):
    """Upload failed validation (type or size)."""


# =============================================================================
# Paths
# =============================================================================

def _media_root() -> str:
    path = os.path.abspath(settings.MEDIA_ROOT)
    os.makedirs(path, exist_ok=True)
    return path


def _resolve(storage_key: str) -> str:
    """Absolute path for a key; refuses keys that escape MEDIA_ROOT."""
    root = _media_root()
    path = os.path.abspath(os.path.join(root, storage_key))
    if os.path.commonpath([root, path]) != root:
        raise UploadRejectedError("Invalid storage key")
    return path


def safe_filename(filename: str | None) -> str:
    base = os.path.basename(filename or "") or "upload"
    cleaned = _UNSAFE_CHARS_RE.sub("_", base).strip("._")
    return cleaned[:100] or "upload"


def build_baby_watch_key(journey_id: str, filename: str | None, now: datetime | None = None) -> str:
    """baby_watch/{journey}_{timestamp}_{name}"""
    now = now or datetime.now(timezone.utc)
    timestamp = int(now.timestamp() * 1000)
    return f"baby_watch/{journey_id}_{timestamp}_{safe_filename(filename)}"


def public_url(storage_key: str) -> str:
    return f"{settings.MEDIA_BASE_URL.rstrip('/')}/{storage_key}"


# =============================================================================
# File Operations
# =============================================================================

def validate_image(filename: str | None, content_type: str | None, size: int) -> None:
    """
    Raise UploadRejectedError unless the upload is an allowed image
    within MAX_UPLOAD_BYTES.
    """
    name = filename or ""
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise UploadRejectedError(f"File extension '.{ext}' not allowed")
    if content_type not in ALLOWED_IMAGE_MIME_TYPES:
        raise UploadRejectedError(f"Content type '{content_type}' not allowed")
    if size > settings.MAX_UPLOAD_BYTES:
        max_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
        raise UploadRejectedError(f"File size exceeds {max_mb:.0f} MB limit")


def store_file(storage_key: str, file: BinaryIO) -> str:
    """Write file under MEDIA_ROOT and return its public URL."""
    path = _resolve(storage_key)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file.seek(0)
    with open(path, "wb") as out:
        for chunk in iter(lambda: file.read(64 * 1024), b""):
            out.write(chunk)
    logger.info("Stored media %s", storage_key)
    return public_url(storage_key)


def delete_file(storage_key: str) -> bool:
    """Remove a stored file. Returns False when it was already gone."""
    path = _resolve(storage_key)
    if not os.path.exists(path):
        return False
    os.remove(path)
    return True
