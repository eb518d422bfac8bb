from unittest.mock import MagicMock

from textburn.core.errors import EncodingFailure, EngineStateError, InvalidOperation
from textburn.engines.base import Engine
from textburn.services.editor import EditSession
from textburn.services.exporter import VideoExporter


def make_engine():
    return MagicMock(spec=Engine)


class TestVideoExporter:
    def test_missing_input_is_reported_without_running_engine(self, tmp_path):
        editor = EditSession(str(tmp_path / "missing.mp4"))
        engine = make_engine()

        result = VideoExporter(editor, engine).export(str(tmp_path / "out.mp4"))

        assert not result.success
        assert result.error_kind == "InputNotFound"
        engine.apply_operations.assert_not_called()
        engine.export.assert_not_called()

    def test_success(self, session, make_overlay, tmp_path):
        op = session.add_text(make_overlay())
        engine = make_engine()
        out = str(tmp_path / "out.mp4")

        result = VideoExporter(session, engine).export(out)

        assert result.success
        assert result.output_path == out
        engine.apply_operations.assert_called_once_with([op])
        engine.export.assert_called_once_with(out, on_progress=None)

    def test_encoding_failure_becomes_result(self, session, make_overlay, tmp_path):
        session.add_text(make_overlay())
        engine = make_engine()
        engine.export.side_effect = EncodingFailure("FFmpeg exited with code 1", "bad font")

        result = VideoExporter(session, engine).export(str(tmp_path / "out.mp4"))

        assert not result.success
        assert result.error_kind == "EncodingFailure"
        assert "bad font" in result.message
        assert result.output_path is None

    def test_rejected_operations_become_result(self, session, make_overlay, tmp_path):
        session.add_text(make_overlay())
        engine = make_engine()
        engine.apply_operations.side_effect = InvalidOperation("Unsupported operation")

        result = VideoExporter(session, engine).export(str(tmp_path / "out.mp4"))

        assert not result.success
        assert result.error_kind == "InvalidOperation"
        engine.export.assert_not_called()

    def test_busy_engine_becomes_result(self, session, make_overlay, tmp_path):
        session.add_text(make_overlay())
        engine = make_engine()
        engine.export.side_effect = EngineStateError("Engine is already running")

        result = VideoExporter(session, engine).export(str(tmp_path / "out.mp4"))

        assert not result.success
        assert result.error_kind == "EngineStateError"
        assert "already running" in result.message
