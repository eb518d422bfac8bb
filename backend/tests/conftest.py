"""
Pytest configuration and shared fixtures.

Storage directories are pointed at a scratch location before any
textburn module is imported, since Settings reads the environment once.
"""

import os
import tempfile

_SCRATCH = tempfile.mkdtemp(prefix="textburn-tests-")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_SCRATCH, "uploads"))
os.environ.setdefault("OUTPUT_DIR", os.path.join(_SCRATCH, "outputs"))

import pytest

from textburn.core.config import get_settings
from textburn.schemas.operations import TextOverlayOperation
from textburn.schemas.style import DEFAULT_TEXT_STYLE, Position
from textburn.services.editor import EditSession


@pytest.fixture
def storage(tmp_path, monkeypatch):
    """Per-test upload/output directories."""
    settings = get_settings()
    uploads = tmp_path / "uploads"
    outputs = tmp_path / "outputs"
    uploads.mkdir()
    outputs.mkdir()
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(uploads))
    monkeypatch.setattr(settings, "OUTPUT_DIR", str(outputs))
    return uploads, outputs


@pytest.fixture
def input_video(tmp_path):
    path = tmp_path / "input.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return str(path)


@pytest.fixture
def make_overlay():
    def _make(text="Hi", x=10.0, y=10.0, start=2.0, duration=5.0, style=DEFAULT_TEXT_STYLE, **kw):
        return TextOverlayOperation(
            text=text,
            position=Position(x=x, y=y),
            style=style,
            start=start,
            duration=duration,
            **kw,
        )

    return _make


@pytest.fixture
def session(input_video):
    return EditSession(input_video)
