from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

import os

from textburn.core.config import get_settings
from textburn.core.errors import InputNotFound, InvalidOperation
from textburn.schemas.api import EditVideoRequest
from textburn.schemas.job import JobCreateResponse, JobStatusResponse, JobDetail
from textburn.services.jobs import build_session, create_job, get_job
from textburn.services.uploads import resolve_input_path

router = APIRouter()
settings = get_settings()


@router.post("/jobs", response_model=JobCreateResponse)
def create_render_job(request: EditVideoRequest):
    """
    Create a background rendering job.
    - `videoId`: id returned by /upload
    - `textOverlays`: overlays to burn in
    """
    try:
        input_path = resolve_input_path(request.video_id)
    except InputNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)

    try:
        build_session(input_path, request.text_overlays)
    except InvalidOperation as e:
        raise HTTPException(status_code=400, detail=e.message)

    job = create_job(input_path, request.text_overlays)

    return JobCreateResponse(
        id=job.id,
        status=job.status.value,
        message=job.message,
    )


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
def get_job_status(job_id: str):
    job = get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    result_url = None
    if job.status.value == "done" and job.output_path:
        result_url = f"{settings.API_V1_PREFIX}/jobs/{job_id}/result"

    return JobStatusResponse(
        id=job.id,
        status=job.status.value,
        message=job.message,
        progress=job.progress or 0.0,
        result_url=result_url,
    )


@router.get("/jobs/{job_id}/detail", response_model=JobDetail)
def get_job_detail(job_id: str):
    job = get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobDetail(
        id=job.id,
        status=job.status.value,
        message=job.message,
        progress=job.progress or 0.0,
        overlays=job.overlays,
        input_path=job.input_path,
        output_path=job.output_path,
        error_kind=job.error_kind,
    )


@router.get("/jobs/{job_id}/result")
def download_result(job_id: str):
    job = get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    if job.status.value != "done" or not job.output_path:
        raise HTTPException(status_code=400, detail="Result not ready")

    output_dir = os.path.abspath(settings.OUTPUT_DIR)
    if not os.path.abspath(job.output_path).startswith(output_dir + os.sep):
        raise HTTPException(status_code=500, detail="Invalid output path")

    if not os.path.isfile(job.output_path):
        raise HTTPException(status_code=404, detail="Output file not found")

    return FileResponse(
        path=job.output_path,
        media_type="video/mp4",
        filename=f"{job.id}_output.mp4",
    )
