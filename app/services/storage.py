"""
Profile image storage on the local filesystem.
Files live under settings.upload_dir and are served statically at /uploads.
"""
import logging
import os
import time
import uuid
from typing import Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.webp'}


def validate_image(file: UploadFile) -> tuple[bool, str]:
    """Validate uploaded image by extension."""
    file_ext = os.path.splitext(file.filename or "")[1].lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        return False, f"File type {file_ext or '(none)'} not allowed. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
    return True, ""


def save_profile_image(file: UploadFile, upload_dir: Optional[str] = None) -> str:
    """Store the upload and return the generated filename."""
    is_valid, error_msg = validate_image(file)
    if not is_valid:
        raise ValidationFailed(error_msg)

    upload_dir = upload_dir or settings.upload_dir
    os.makedirs(upload_dir, exist_ok=True)

    content = file.file.read()
    if len(content) > settings.max_image_size:
        raise ValidationFailed(f"Image exceeds the {settings.max_image_size // (1024 * 1024)}MB limit")

    file_ext = os.path.splitext(file.filename)[1].lower()
    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{file_ext}"
    with open(os.path.join(upload_dir, filename), "wb") as f:
        f.write(content)

    logger.info(f"Profile image stored: {filename} ({len(content)} bytes)")
    return filename


def delete_profile_image(filename: Optional[str], upload_dir: Optional[str] = None) -> None:
    """Remove a stored image. Failures are logged, never raised."""
    if not filename:
        return
    image_path = os.path.join(upload_dir or settings.upload_dir, filename)
    if not os.path.exists(image_path):
        return
    try:
        os.remove(image_path)
        logger.info(f"Profile image deleted: {filename}")
    except OSError as e:
        logger.error(f"Error deleting profile image {filename}: {e}")
