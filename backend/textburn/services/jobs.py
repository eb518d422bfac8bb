import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from textburn.core.config import get_settings
from textburn.core.errors import ExportResult, InvalidOperation
from textburn.engines import get_engine
from textburn.models.job import JobStatusEnum, RenderJob
from textburn.schemas.api import TextOverlay
from textburn.services.editor import EditSession
from textburn.services.exporter import VideoExporter
from textburn.services.media_probe import get_video_duration_seconds
from textburn.services.uploads import new_output_path

logger = logging.getLogger(__name__)
settings = get_settings()

# Global executor for parallel processing
executor = ThreadPoolExecutor(max_workers=settings.MAX_WORKERS)

# Jobs live only as long as the process
_jobs: Dict[str, RenderJob] = {}
_lock = threading.Lock()


def build_session(input_path: str, overlays: List[TextOverlay]) -> EditSession:
    editor = EditSession(input_path)
    for overlay in overlays:
        editor.add_overlay(
            text=overlay.text,
            position=overlay.position,
            style=overlay.style,
            start=overlay.timestamp,
            duration=overlay.duration,
            overlay_id=overlay.id,
        )
    return editor


def export_overlays(
    input_path: str,
    overlays: List[TextOverlay],
    output_path: str,
    on_progress=None,
) -> ExportResult:
    """Build a session, render it with the configured engine, report the outcome."""
    try:
        editor = build_session(input_path, overlays)
    except InvalidOperation as e:
        return ExportResult.failure(e)
    duration = get_video_duration_seconds(input_path)
    engine = get_engine(input_path, media_duration=duration)
    return VideoExporter(editor, engine).export(output_path, on_progress=on_progress)


def create_job(input_path: str, overlays: List[TextOverlay]) -> RenderJob:
    job = RenderJob(
        input_path=input_path,
        overlays=[o.model_dump(by_alias=True) for o in overlays],
        status=JobStatusEnum.pending,
        message="Queued",
        progress=0.0,
    )
    with _lock:
        _jobs[job.id] = job

    # Enqueue job to thread pool
    executor.submit(render_job, job.id)

    return job


def get_job(job_id: str) -> Optional[RenderJob]:
    with _lock:
        return _jobs.get(job_id)


def _update(job: RenderJob, **changes) -> None:
    with _lock:
        for name, value in changes.items():
            setattr(job, name, value)
        job.touch()


def render_job(job_id: str) -> None:
    """
    Main function called in the thread pool to process a job.
    Engine progress callbacks update job.progress (0–100).
    """
    job = get_job(job_id)
    if job is None:
        return

    _update(
        job,
        status=JobStatusEnum.processing,
        message="Processing with ffmpeg",
        progress=1.0,
    )

    overlays = [TextOverlay(**o) for o in job.overlays]
    output_path = new_output_path(prefix=job.id)

    try:
        result = export_overlays(
            job.input_path,
            overlays,
            output_path,
            on_progress=lambda pct: _update(job, progress=pct),
        )
    except Exception as e:
        logger.exception("Job %s crashed", job_id)
        _update(job, status=JobStatusEnum.error, message=f"Exception: {e}")
        return

    if result.success:
        _update(
            job,
            status=JobStatusEnum.done,
            message="Rendering complete",
            output_path=result.output_path,
            progress=100.0,
        )
    else:
        _update(
            job,
            status=JobStatusEnum.error,
            message=result.message,
            error_kind=result.error_kind,
        )
