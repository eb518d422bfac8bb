import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


class JobStatusEnum(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    done = "done"
    error = "error"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RenderJob:
    input_path: str
    overlays: List[dict]  # list of overlays as JSON
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    output_path: Optional[str] = None

    status: JobStatusEnum = JobStatusEnum.pending
    message: Optional[str] = None
    error_kind: Optional[str] = None

    # progress in percentage (0–100)
    progress: float = 0.0

    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def touch(self) -> None:
        self.updated_at = _now()
