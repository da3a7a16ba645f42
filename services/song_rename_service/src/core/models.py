"""Data models for candidate files, suggestions and run outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..filesystem.base import FileHandle
from .exceptions import ValidationError


class FileStatus(Enum):
    """Rename status of a candidate file."""

    IDLE = "idle"
    RENAMING = "renaming"
    RENAMED = "renamed"
    ERROR = "error"


@dataclass
class CandidateFile:
    """An audio file discovered by a folder scan.

    ``new_name`` is only set while the status is RENAMED and ``error`` only while
    it is ERROR; use the ``mark_*`` methods rather than assigning the fields.
    """

    id: str
    name: str
    handle: FileHandle = field(repr=False)
    selected: bool = True
    status: FileStatus = FileStatus.IDLE
    new_name: str | None = None
    error: str | None = None

    @classmethod
    def from_handle(cls, handle: FileHandle) -> "CandidateFile":
        return cls(id=handle.name, name=handle.name, handle=handle)

    @property
    def is_busy(self) -> bool:
        return self.status is FileStatus.RENAMING

    def mark_renaming(self) -> None:
        self.status = FileStatus.RENAMING
        self.new_name = None
        self.error = None

    def mark_renamed(self, new_name: str, handle: FileHandle | None = None) -> None:
        """Record a successful rename, moving identity over if the handle changed."""
        if handle is not None and handle is not self.handle:
            self.handle = handle
            self.id = handle.name
            self.name = handle.name
        self.status = FileStatus.RENAMED
        self.new_name = new_name
        self.error = None

    def mark_error(self, message: str) -> None:
        self.status = FileStatus.ERROR
        self.new_name = None
        self.error = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "selected": self.selected,
            "status": self.status.value,
            "new_name": self.new_name,
            "error": self.error,
        }


class NameSuggestion(BaseModel):
    """A generated song title and artist pair."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="The suggested song title")
    artist: str = Field(..., min_length=1, description="The suggested artist name")

    @field_validator("title", "artist")
    @classmethod
    def strip_and_require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class BatchRequest(BaseModel):
    """Request for a batch of name suggestions sized to the selection."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(..., gt=0, description="Number of suggestions to generate")
    style_prompt: str | None = Field(default=None, description="Optional free-text style guidance")

    @classmethod
    def for_selection(cls, count: int, style_prompt: str | None = None) -> "BatchRequest":
        """Build a request, rejecting empty selections.

        Raises:
            ValidationError: If count is not positive
        """
        prompt = style_prompt.strip() if style_prompt else None
        try:
            return cls(count=count, style_prompt=prompt or None)
        except PydanticValidationError as e:
            raise ValidationError(f"A batch request needs at least one file, got count={count}") from e


class ScanStatus(Enum):
    """Outcome kind of a folder scan."""

    OK = "ok"
    NO_MATCHES = "no_matches"
    PERMISSION_DENIED = "permission_denied"


@dataclass
class ScanResult:
    """Result of scanning a folder for candidate files."""

    status: ScanStatus
    candidates: list[CandidateFile] = field(default_factory=list)
    skipped: int = 0
    error: str | None = None

    @property
    def found(self) -> int:
        return len(self.candidates)


class BatchStatus(Enum):
    """Outcome kind of a rename run."""

    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class BatchOutcome:
    """Aggregate result of a rename run."""

    status: BatchStatus
    success_count: int
    total_count: int
    error: str | None = None
    rate_limited: bool = False
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        """Convert outcome to dictionary representation."""
        return {
            "status": self.status.value,
            "success_count": self.success_count,
            "total_count": self.total_count,
            "failure_count": self.failure_count,
            "error": self.error,
            "rate_limited": self.rate_limited,
            "failures": dict(self.failures),
        }
