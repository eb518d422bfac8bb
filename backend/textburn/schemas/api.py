from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from textburn.schemas.style import DEFAULT_TEXT_STYLE, Position, TextStyle

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TextOverlay(CamelModel):
    id: Optional[str] = None
    text: str = Field(min_length=1)
    position: Position
    timestamp: float = Field(default=0.0, ge=0)   # start, seconds
    duration: Optional[float] = Field(default=None, gt=0)
    style: TextStyle = DEFAULT_TEXT_STYLE


class EditVideoRequest(CamelModel):
    video_id: str
    text_overlays: List[TextOverlay] = []


class UploadedVideo(CamelModel):
    file_name: str


class EditedVideo(CamelModel):
    output_path: str


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


UploadVideoResponse = ApiResponse[UploadedVideo]
EditVideoResponse = ApiResponse[EditedVideo]
