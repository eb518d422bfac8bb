import enum
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from textburn.schemas.operations import Operation

ProgressCallback = Callable[[float], None]


class EngineState(str, enum.Enum):
    idle = "idle"
    configured = "configured"
    running = "running"
    succeeded = "succeeded"
    failed = "failed"


class Engine(ABC):
    """
    Rendering back end.

    apply_operations() configures the engine for a list of overlays and
    export() renders them into a new file, blocking until the render
    settles. export() raises EncodingFailure when rendering fails.
    """

    state: EngineState = EngineState.idle

    def __init__(self, input_path: str):
        self.input_path = input_path

    @abstractmethod
    def apply_operations(self, operations: Sequence[Operation]) -> None:
        ...

    @abstractmethod
    def export(
        self,
        output_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        ...
