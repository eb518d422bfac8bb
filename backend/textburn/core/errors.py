from typing import Optional

from pydantic import BaseModel


class EditorError(Exception):
    """Base class for failures reported by the editing core."""

    kind: str = "EditorError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputNotFound(EditorError):
    kind = "InputNotFound"


class EncodingFailure(EditorError):
    kind = "EncodingFailure"

    def __init__(self, message: str, diagnostic: str = ""):
        super().__init__(message)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        if self.diagnostic:
            return f"{self.message}: {self.diagnostic}"
        return self.message


class InvalidOperation(EditorError):
    kind = "InvalidOperation"


class EngineStateError(EditorError):
    kind = "EngineStateError"


class ExportResult(BaseModel):
    success: bool
    output_path: Optional[str] = None
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, output_path: str) -> "ExportResult":
        return cls(success=True, output_path=output_path)

    @classmethod
    def failure(cls, error: EditorError) -> "ExportResult":
        return cls(success=False, error_kind=error.kind, message=str(error))
