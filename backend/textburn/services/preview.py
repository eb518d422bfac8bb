from typing import List

from textburn.schemas.operations import Operation, OverlayPatch
from textburn.schemas.style import Position, clamp_percent
from textburn.services.editor import EditSession


def pointer_to_position(
    pointer_x: float,
    pointer_y: float,
    canvas_width: float,
    canvas_height: float,
) -> Position:
    """Pointer offset inside the preview canvas -> percentage position."""
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError("Preview canvas must have a positive size")
    return Position(
        x=clamp_percent(pointer_x / canvas_width * 100),
        y=clamp_percent(pointer_y / canvas_height * 100),
    )


def move_overlay(session: EditSession, overlay_id: str, position: Position) -> Operation:
    """Canvas drag: changes where the text sits, never when it shows."""
    return session.apply_edit(overlay_id, OverlayPatch(position=position.clamped()))


def visible_overlays(session: EditSession, current_time: float) -> List[Operation]:
    return [
        op for op in session.get_operations() if op.start <= current_time < op.end
    ]
