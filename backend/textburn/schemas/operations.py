import uuid
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from textburn.schemas.style import DEFAULT_TEXT_STYLE, Position, TextStyle


def new_operation_id() -> str:
    return uuid.uuid4().hex


class TextOverlayOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    id: str = Field(default_factory=new_operation_id)
    text: str
    position: Position = Position()
    style: TextStyle = DEFAULT_TEXT_STYLE
    start: float = 0.0      # seconds
    duration: float = 5.0   # seconds

    @property
    def end(self) -> float:
        return self.start + self.duration


# Every operation kind the editor understands. Interpreters dispatch on
# ``type`` and treat anything else as an InvalidOperation.
Operation = TextOverlayOperation


class OverlayPatch(BaseModel):
    """Partial update for one overlay; unset fields are left alone."""

    text: Optional[str] = None
    position: Optional[Position] = None
    style: Optional[TextStyle] = None
    start: Optional[float] = None
    duration: Optional[float] = None

    def changes(self) -> dict:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
