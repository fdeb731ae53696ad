from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Workspace(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: Path


class CheckRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: Path


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: Path
    line: int
    column: int
    severity: Severity
    message: str
    code: str | None = None
    end_line: int | None = None
    end_column: int | None = None


class VerificationStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class VerificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    message: str
    status: VerificationStatus


class CheckResult(BaseModel):
    """Outcome of one build run, handed back to the host."""

    request: CheckRequest
    workspace: Workspace
    targets: list[str]
    command: list[str]
    returncode: int
    diagnostics: list[Diagnostic]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)
