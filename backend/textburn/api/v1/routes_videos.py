import logging
import os

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from textburn.core.errors import InputNotFound, InvalidOperation
from textburn.schemas.api import (
    EditedVideo,
    EditVideoRequest,
    EditVideoResponse,
    UploadedVideo,
    UploadVideoResponse,
)
from textburn.services.jobs import export_overlays
from textburn.services.uploads import new_output_path, resolve_input_path, save_upload

logger = logging.getLogger(__name__)
router = APIRouter()

FAILURE_STATUS = {
    InputNotFound.kind: 404,
    InvalidOperation.kind: 400,
}


def _failure(status_code: int, response: EditVideoResponse | UploadVideoResponse):
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(by_alias=True, exclude_none=True),
    )


@router.post("/upload", response_model=UploadVideoResponse)
async def upload_video(file: UploadFile = File(...)):
    """
    Store a source video.
    Returns `fileName`, the video id to pass to /edit and /jobs.
    """
    if file.content_type is not None and not file.content_type.startswith("video/"):
        return _failure(
            400, UploadVideoResponse(success=False, error="Uploaded file must be a video")
        )

    file_name = await run_in_threadpool(save_upload, file.file, file.filename)
    return UploadVideoResponse(success=True, data=UploadedVideo(file_name=file_name))


@router.post("/edit", response_model=EditVideoResponse)
async def edit_video(request: EditVideoRequest):
    """
    Burn `textOverlays` into the uploaded video and wait for the result.
    Use /jobs for long renders.
    """
    try:
        input_path = resolve_input_path(request.video_id)
    except InputNotFound as e:
        logger.warning(e.message)
        return _failure(404, EditVideoResponse(success=False, error="Video not found"))

    output_path = new_output_path()
    result = await run_in_threadpool(
        export_overlays, input_path, request.text_overlays, output_path
    )

    if not result.success:
        status_code = FAILURE_STATUS.get(result.error_kind, 500)
        return _failure(
            status_code,
            EditVideoResponse(
                success=False,
                error=f"Error processing video: {result.message}",
            ),
        )

    return EditVideoResponse(
        success=True,
        data=EditedVideo(output_path=os.path.basename(output_path)),
    )
