import os
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()  # loads .env if present


class Settings:
    PROJECT_NAME: str = "Text Overlay Editor Backend"
    API_V1_PREFIX: str = "/api/v1"

    BACKEND_CORS_ORIGINS: list[str] = [
        "*"  # relax for local use; tighten in production
    ]

    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "/app/data/uploads")
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "/app/data/outputs")

    # Rendering back end, resolved through textburn.engines.get_engine
    ENGINE: str = os.getenv("ENGINE", "ffmpeg")
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY", "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY", "ffprobe")

    # Output encoding
    VIDEO_CODEC: str = os.getenv("VIDEO_CODEC", "libx264")
    CRF: int = int(os.getenv("CRF", "23"))
    PRESET: str = os.getenv("PRESET", "medium")
    VIDEO_PROFILE: str = os.getenv("VIDEO_PROFILE", "main")
    PIXEL_FORMAT: str = os.getenv("PIXEL_FORMAT", "yuv420p")
    MAX_MUXING_QUEUE_SIZE: int = int(os.getenv("MAX_MUXING_QUEUE_SIZE", "1024"))
    AUDIO_CODEC: str = os.getenv("AUDIO_CODEC", "copy")

    # Seconds an overlay stays on screen when the caller gives no duration
    DEFAULT_OVERLAY_DURATION: float = float(os.getenv("DEFAULT_OVERLAY_DURATION", "5"))

    # Max parallel ffmpeg jobs
    MAX_WORKERS: int = int(os.getenv("MAX_WORKERS", "2"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings():
    return Settings()
