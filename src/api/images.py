"""Image upload endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_app_settings, require_auth
from src.config import Settings
from src.services.auth import AuthState
from src.services.image_service import clear_image, is_allowed_image, store_image

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


@router.put("/post-image")
async def upload_post_image(
    auth: Annotated[AuthState, Depends(require_auth)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    image: Annotated[UploadFile | None, File()] = None,
    old_path: Annotated[str | None, Form(alias="oldPath")] = None,
):
    """Store a post image and optionally remove the one it replaces."""
    if not is_allowed_image(image):
        if image is not None:
            logger.info(f"Ignoring upload with content type {image.content_type}")
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "No file provided!"})

    file_path = await store_image(image, settings.upload_dir)

    if old_path:
        clear_image(old_path, settings.upload_dir)

    logger.info(f"User {auth.user_id} uploaded {file_path}")
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "File stored.", "filePath": file_path},
    )
