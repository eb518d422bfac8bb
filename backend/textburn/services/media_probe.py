import logging
import subprocess

from textburn.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_video_duration_seconds(input_path: str) -> float | None:
    """Use ffprobe to get input video duration in seconds."""
    try:
        proc = subprocess.run(
            [
                settings.FFPROBE_BINARY,
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                input_path,
            ],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.warning("ffprobe unavailable: %s", e)
        return None

    if proc.returncode != 0:
        return None

    out = proc.stdout.decode("utf-8", errors="ignore").strip()
    # Sometimes ffprobe returns N/A or empty
    try:
        return float(out)
    except (TypeError, ValueError):
        return None
