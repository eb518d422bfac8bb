import logging
import os
from typing import Optional

from textburn.core.errors import EditorError, ExportResult, InputNotFound
from textburn.engines import Engine
from textburn.engines.base import ProgressCallback
from textburn.services.editor import EditSession

logger = logging.getLogger(__name__)


class VideoExporter:
    """Hands a session's overlays to an engine and reports the outcome."""

    def __init__(self, editor: EditSession, engine: Engine):
        self.editor = editor
        self.engine = engine

    def export(
        self,
        output_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        if not os.path.isfile(self.editor.input_path):
            error = InputNotFound(f"Video not found: {self.editor.input_path}")
            logger.warning(error.message)
            return ExportResult.failure(error)

        try:
            self.engine.apply_operations(self.editor.get_operations())
            self.engine.export(output_path, on_progress=on_progress)
        except EditorError as e:
            logger.warning("Export to %s failed: %s", output_path, e)
            return ExportResult.failure(e)

        logger.info("Video exported to %s", output_path)
        return ExportResult.ok(output_path)
