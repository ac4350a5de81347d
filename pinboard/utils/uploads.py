"""Storage of uploaded image files on local disk."""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from pinboard.config import settings
from pinboard.core.exceptions import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}

UPLOADS_URL_PREFIX = "/uploads"


def upload_dir() -> Path:
    """Directory uploaded files are written to, created on demand."""
    path = Path(settings.upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def generate_filename(extension: str) -> str:
    """Build a unique file name of the form ``<epoch-ms>-<random><ext>``."""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


async def save_upload(file: UploadFile) -> str:
    """Validate and store an uploaded image.

    Args:
        file: The multipart upload.

    Returns:
        Public URL of the stored file.

    Raises:
        ValidationError: If the file type is not allowed, the file is
            empty, or it exceeds the size limit.
    """
    extension = Path(file.filename or "").suffix.lower()
    content_type = (file.content_type or "").lower()
    if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(
            "Only image files are allowed (jpeg, jpg, png, gif, webp)",
            code=ErrorCode.INVALID_UPLOAD,
        )

    data = await file.read(settings.max_upload_bytes + 1)
    if not data:
        raise ValidationError("Uploaded file is empty", code=ErrorCode.INVALID_UPLOAD)
    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise ValidationError(
            f"File exceeds the {limit_mb}MB size limit",
            code=ErrorCode.INVALID_UPLOAD,
        )

    filename = generate_filename(extension)
    (upload_dir() / filename).write_bytes(data)
    logger.info("Stored upload %s (%d bytes)", filename, len(data))

    return f"{UPLOADS_URL_PREFIX}/{filename}"


def discard_upload(url: str) -> None:
    """Delete a stored file given its public URL. Missing files are ignored."""
    if not url.startswith(f"{UPLOADS_URL_PREFIX}/"):
        return
    path = Path(settings.upload_dir) / url.removeprefix(f"{UPLOADS_URL_PREFIX}/")
    path.unlink(missing_ok=True)
