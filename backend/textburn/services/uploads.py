import logging
import os
import uuid
from typing import BinaryIO

from textburn.core.config import get_settings
from textburn.core.errors import InputNotFound

logger = logging.getLogger(__name__)
settings = get_settings()


def save_upload(source: BinaryIO, filename: str | None) -> str:
    """
    Store an uploaded video under UPLOAD_DIR.

    Returns the stored file name, which callers use as the video id.
    """
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)

    file_ext = os.path.splitext(filename or "")[1] or ".mp4"
    stored_name = f"{uuid.uuid4()}{file_ext}"
    file_path = os.path.join(settings.UPLOAD_DIR, stored_name)

    with open(file_path, "wb") as f:
        f.write(source.read())

    logger.info("Stored upload %r as %s", filename, stored_name)
    return stored_name


def resolve_input_path(video_id: str) -> str:
    """Map a video id back to its path; the file must exist."""
    if not video_id or os.path.basename(video_id) != video_id:
        raise InputNotFound(f"Invalid video id: {video_id!r}")

    path = os.path.join(settings.UPLOAD_DIR, video_id)
    if not os.path.isfile(path):
        raise InputNotFound(f"Video not found: {video_id}")
    return path


def new_output_path(prefix: str = "output") -> str:
    os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
    return os.path.join(settings.OUTPUT_DIR, f"{prefix}-{uuid.uuid4().hex}.mp4")
