"""Storage of uploaded post images on the local filesystem."""

import logging
import uuid
from pathlib import Path

import aiofiles
from fastapi import UploadFile

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/png", "image/jpg", "image/jpeg"}

# Public prefix under which upload_dir is mounted
IMAGE_URL_PREFIX = "images"

CHUNK_SIZE = 64 * 1024


def is_allowed_image(upload: UploadFile | None) -> bool:
    """Check that an upload is present and is a PNG or JPEG."""
    if upload is None or not upload.filename:
        return False
    return (upload.content_type or "").lower() in ALLOWED_IMAGE_TYPES


def stored_name(filename: str) -> str:
    """Unique on-disk name that keeps the client's file name readable."""
    return f"{uuid.uuid4()}-{Path(filename).name}"


def resolve_image_path(image_url: str, upload_dir: Path) -> Path:
    """Map a stored image URL back to its file inside ``upload_dir``.

    Only the final path component is used, so a caller-supplied path can
    never point outside the upload directory.
    """
    normalized = image_url.replace("\\", "/")
    return Path(upload_dir) / Path(normalized).name


async def store_image(upload: UploadFile, upload_dir: Path) -> str:
    """Write an upload into ``upload_dir`` and return its public path."""
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    name = stored_name(upload.filename)
    async with aiofiles.open(upload_dir / name, "wb") as f:
        while chunk := await upload.read(CHUNK_SIZE):
            await f.write(chunk)

    image_url = f"{IMAGE_URL_PREFIX}/{name}"
    logger.info(f"Stored image {image_url}")
    return image_url


def clear_image(image_url: str | None, upload_dir: Path) -> bool:
    """Delete a stored image. Returns False when there was nothing to delete.

    Anything that is not a regular file directly inside ``upload_dir`` is
    left alone.
    """
    if not image_url:
        return False

    name = Path(image_url.replace("\\", "/")).name
    if name in ("", ".", ".."):
        logger.warning(f"Refusing to remove image {image_url!r}")
        return False

    path = resolve_image_path(image_url, upload_dir)
    if not path.is_file():
        logger.warning(f"Image {image_url} not found, nothing to remove")
        return False

    try:
        path.unlink()
    except OSError as e:
        logger.warning(f"Failed to remove image {image_url}: {e}")
        return False

    logger.info(f"Removed image {image_url}")
    return True
