"""Core rename logic: scanning, selection, execution and status projection."""

from .exceptions import (
    BatchInProgressError,
    FolderPermissionError,
    RateLimitedError,
    RenameError,
    ServiceError,
    SongRenameError,
    ValidationError,
)
from .executor import RenameExecutor, build_file_name
from .models import (
    BatchOutcome,
    BatchRequest,
    BatchStatus,
    CandidateFile,
    FileStatus,
    NameSuggestion,
    ScanResult,
    ScanStatus,
)
from .projection import StatusProjection
from .scanner import DirectoryScanner
from .selection import SelectionModel

__all__ = [
    "BatchInProgressError",
    "BatchOutcome",
    "BatchRequest",
    "BatchStatus",
    "CandidateFile",
    "DirectoryScanner",
    "FileStatus",
    "FolderPermissionError",
    "NameSuggestion",
    "RateLimitedError",
    "RenameError",
    "RenameExecutor",
    "ScanResult",
    "ScanStatus",
    "SelectionModel",
    "ServiceError",
    "SongRenameError",
    "StatusProjection",
    "ValidationError",
    "build_file_name",
]
