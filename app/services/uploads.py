import re
import secrets
import time
from pathlib import Path
from typing import Dict, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from app.config import settings
from app.core.errors import ValidationError

logger = get_logger()

# Stored extension comes from the accepted MIME type, never the client filename
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def file_extension(content_type: Optional[str]) -> str:
    return IMAGE_EXTENSIONS.get(content_type or "", "jpg")


def _random_name(ext: str) -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"


def build_file_name(
    content_type: Optional[str],
    slug: Optional[str] = None,
    image_type: Optional[str] = None,
    index: Optional[str] = None,
) -> str:
    """Deterministic name for listing images, random otherwise.

    ``<slug>-main.<ext>`` for the main image, ``<slug>-<index>.<ext>`` for a
    slider image; anything incomplete falls back to ``<millis>-<hex>.<ext>``.
    """
    ext = file_extension(content_type)
    if slug and image_type:
        safe_slug = re.sub(r"[^a-z0-9-]", "-", slug.lower())
        if image_type == "main":
            return f"{safe_slug}-main.{ext}"
        if image_type == "slider" and index and index.isdigit():
            return f"{safe_slug}-{index}.{ext}"
    return _random_name(ext)


def check_image(content_type: Optional[str], size: int) -> None:
    if content_type not in settings.ALLOWED_IMAGE_TYPES or content_type not in IMAGE_EXTENSIONS:
        raise ValidationError("Invalid file type. Only images are allowed.")
    if size > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(f"File size exceeds {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit")


async def read_image(file: UploadFile) -> bytes:
    """Body of an image upload, read no further than the size limit."""
    check_image(file.content_type, file.size or 0)
    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    check_image(file.content_type, len(content))
    return content


async def store_image(content: bytes, file_name: str) -> Dict[str, str]:
    upload_dir = Path(settings.UPLOAD_DIR)

    def _write():
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / file_name).write_bytes(content)

    await run_in_threadpool(_write)
    url = f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{file_name}"
    logger.info("Image stored", file_name=file_name, size=len(content))
    return {"url": url, "fileName": file_name}
