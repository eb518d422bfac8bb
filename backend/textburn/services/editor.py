import logging
from typing import List, Optional

from textburn.core.config import get_settings
from textburn.core.errors import InvalidOperation
from textburn.schemas.operations import Operation, OverlayPatch, TextOverlayOperation
from textburn.schemas.style import DEFAULT_TEXT_STYLE, Position, TextStyle

logger = logging.getLogger(__name__)
settings = get_settings()


class EditSession:
    """
    Editing context for one source video.

    Owns the ordered overlay list. Every mutation goes through this class
    and addresses overlays by their id, so the timeline and the preview
    canvas never splice the list themselves.
    """

    def __init__(self, input_path: str):
        self.input_path = input_path
        self._operations: List[Operation] = []

    def add_text(self, op: TextOverlayOperation) -> TextOverlayOperation:
        if any(existing.id == op.id for existing in self._operations):
            raise InvalidOperation(f"Duplicate overlay id: {op.id}")
        self._operations.append(op)
        logger.debug("Added overlay %s (%r at %ss)", op.id, op.text, op.start)
        return op

    def add_overlay(
        self,
        text: str,
        position: Position,
        style: TextStyle = DEFAULT_TEXT_STYLE,
        start: Optional[float] = None,
        duration: Optional[float] = None,
        overlay_id: Optional[str] = None,
    ) -> TextOverlayOperation:
        fields = dict(
            text=text,
            position=position,
            style=style,
            start=0.0 if start is None else start,
            duration=settings.DEFAULT_OVERLAY_DURATION if duration is None else duration,
        )
        if overlay_id:
            fields["id"] = overlay_id
        return self.add_text(TextOverlayOperation(**fields))

    def get_operations(self) -> List[Operation]:
        # Operations are frozen, so a shallow copy of the list is a snapshot.
        return list(self._operations)

    list_operations = get_operations

    def get(self, overlay_id: str) -> Operation:
        for op in self._operations:
            if op.id == overlay_id:
                return op
        raise InvalidOperation(f"Unknown overlay: {overlay_id}")

    def find(self, text: str, start: float) -> Operation:
        """Legacy lookup by (text, start); ambiguous pairs are rejected."""
        matches = [
            op for op in self._operations if op.text == text and op.start == start
        ]
        if not matches:
            raise InvalidOperation(f"No overlay {text!r} at {start}s")
        if len(matches) > 1:
            raise InvalidOperation(
                f"{len(matches)} overlays share text {text!r} at {start}s"
            )
        return matches[0]

    def apply_edit(self, overlay_id: str, patch: OverlayPatch) -> Operation:
        index = self._index_of(overlay_id)
        updated = self._operations[index].model_copy(update=patch.changes())
        self._operations[index] = updated
        return updated

    def remove(self, overlay_id: str) -> Operation:
        index = self._index_of(overlay_id)
        removed = self._operations.pop(index)
        logger.debug("Removed overlay %s", overlay_id)
        return removed

    def _index_of(self, overlay_id: str) -> int:
        for index, op in enumerate(self._operations):
            if op.id == overlay_id:
                return index
        raise InvalidOperation(f"Unknown overlay: {overlay_id}")

    def __len__(self) -> int:
        return len(self._operations)
