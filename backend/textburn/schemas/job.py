from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from textburn.schemas.api import TextOverlay
from enum import Enum


class JobStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    done = "done"
    error = "error"


class JobBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: JobStatus
    message: Optional[str] = None
    progress: float = 0.0


class JobCreateResponse(JobBase):
    pass


class JobDetail(JobBase):
    overlays: List[TextOverlay]
    input_path: str
    output_path: Optional[str] = None
    error_kind: Optional[str] = None


class JobStatusResponse(JobBase):
    result_url: Optional[str] = None
