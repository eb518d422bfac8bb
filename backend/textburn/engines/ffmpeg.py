import logging
import re
import shlex
import subprocess
from collections import deque
from typing import List, Optional, Sequence

from textburn.core.config import get_settings
from textburn.core.errors import EncodingFailure, EngineStateError
from textburn.engines.base import Engine, EngineState, ProgressCallback
from textburn.schemas.operations import Operation
from textburn.services.filter_graph import (
    FilterStage,
    build_filter_complex,
    compile_filters,
)

logger = logging.getLogger(__name__)
settings = get_settings()

# `-progress pipe:2` writes key=value lines; everything else is diagnostics
PROGRESS_LINE = re.compile(r"^\w+=\S*$")
DIAGNOSTIC_TAIL = 20


class FFmpegEngine(Engine):
    """
    Burns text overlays into a video by driving the ffmpeg binary.

    Idle -> Configured (apply_operations) -> Running (export)
         -> Succeeded | Failed
    """

    def __init__(self, input_path: str, media_duration: float | None = None):
        super().__init__(input_path)
        self.media_duration = media_duration
        self.stages: List[FilterStage] = []
        self.state = EngineState.idle

    def input_options(self) -> List[str]:
        # Keep going past minor decode errors in the source
        return ["-y", "-err_detect", "ignore_err"]

    def output_options(self) -> List[str]:
        return [
            "-c:v", settings.VIDEO_CODEC,
            "-crf", str(settings.CRF),
            "-preset", settings.PRESET,
            "-profile:v", settings.VIDEO_PROFILE,
            "-pix_fmt", settings.PIXEL_FORMAT,
            "-movflags", "+faststart",
            "-max_muxing_queue_size", str(settings.MAX_MUXING_QUEUE_SIZE),
            "-c:a", settings.AUDIO_CODEC,
        ]

    def apply_operations(self, operations: Sequence[Operation]) -> None:
        if self.state == EngineState.running:
            raise EngineStateError("Cannot reconfigure while an export is running")

        # Re-derived from scratch on every call
        self.stages = compile_filters(operations, self.media_duration)
        self.state = EngineState.configured
        for stage in self.stages:
            logger.debug("Text overlay %s: %s", stage.overlay_id, stage.render())

    def build_command(self, output_path: str) -> List[str]:
        filter_complex, final_label = build_filter_complex(self.stages)

        cmd = [settings.FFMPEG_BINARY] + self.input_options() + ["-i", self.input_path]
        if filter_complex:
            cmd += ["-filter_complex", filter_complex, "-map", final_label]
        else:
            cmd += ["-map", "0:v"]

        cmd += ["-map", "0:a?"]
        cmd += self.output_options()
        cmd += [
            "-progress",
            "pipe:2",   # progress key=value lines to stderr (FD 2)
            "-nostats",
            "-v",
            "error",
            output_path,
        ]
        return cmd

    def export(
        self,
        output_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        if self.state == EngineState.idle:
            raise EngineStateError("apply_operations() must be called before export()")
        if self.state == EngineState.running:
            raise EngineStateError("An export is already running")

        cmd = self.build_command(output_path)
        logger.info("FFmpeg process starting: %s", shlex.join(cmd))
        self.state = EngineState.running

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,   # we don't need stdout
                stderr=subprocess.PIPE,      # -progress pipe:2 writes here
                text=True,
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            self.state = EngineState.failed
            logger.error("FFmpeg could not be started: %s", e)
            raise EncodingFailure("FFmpeg could not be started", str(e)) from e

        diagnostics: deque[str] = deque(maxlen=DIAGNOSTIC_TAIL)

        try:
            if proc.stderr is not None:
                self._read_stderr(proc.stderr, diagnostics, on_progress)
            returncode = proc.wait()
        except Exception as e:
            self.state = EngineState.failed
            logger.error("FFmpeg output stream failed: %s", e)
            raise EncodingFailure("FFmpeg output stream failed", str(e)) from e
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()

        if returncode != 0:
            self.state = EngineState.failed
            diagnostic = "\n".join(diagnostics)
            logger.error("FFmpeg failed with exit code %s: %s", returncode, diagnostic)
            raise EncodingFailure(f"FFmpeg exited with code {returncode}", diagnostic)

        self.state = EngineState.succeeded
        logger.info("FFmpeg processing finished: %s", output_path)

    def _read_stderr(self, stream, diagnostics, on_progress) -> None:
        for line in stream:
            line = line.strip()
            if not line:
                continue
            if not PROGRESS_LINE.match(line):
                logger.debug("FFmpeg: %s", line)
                diagnostics.append(line)
                continue

            # out_time_ms=1234567 (microseconds, despite the name)
            if line.startswith("out_time_ms="):
                pct = self._progress_percent(line.split("=", 1)[1])
                if pct is not None:
                    logger.debug("Processing: %.1f%% done", pct)
                    if on_progress is not None:
                        on_progress(pct)

    def _progress_percent(self, raw_val: str) -> float | None:
        if not self.media_duration or self.media_duration <= 0:
            return None
        # Sometimes ffmpeg prints out_time_ms=N/A
        try:
            us = int(raw_val.strip())
        except ValueError:
            return None
        t_seconds = us / 1_000_000.0
        return max(0.0, min(99.0, (t_seconds / self.media_duration) * 100.0))
