from typing import Dict, Optional, Type

from textburn.core.config import get_settings
from textburn.engines.base import Engine, EngineState
from textburn.engines.ffmpeg import FFmpegEngine

ENGINES: Dict[str, Type[Engine]] = {
    "ffmpeg": FFmpegEngine,
}


def get_engine(
    input_path: str,
    media_duration: float | None = None,
    name: Optional[str] = None,
) -> Engine:
    """Instantiate the rendering back end named in settings (or `name`)."""
    engine_name = (name or get_settings().ENGINE).lower()
    try:
        engine_cls = ENGINES[engine_name]
    except KeyError:
        raise ValueError(f"Unknown rendering engine: {engine_name}") from None
    return engine_cls(input_path, media_duration=media_duration)


__all__ = ["ENGINES", "Engine", "EngineState", "FFmpegEngine", "get_engine"]
