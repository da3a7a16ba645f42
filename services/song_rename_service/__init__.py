"""AI-assisted batch renaming of local audio files."""

from services.song_rename_service.src.core import (
    BatchOutcome,
    BatchStatus,
    CandidateFile,
    FileStatus,
    NameSuggestion,
    ScanResult,
    ScanStatus,
)
from services.song_rename_service.src.orchestrator import BatchRenameOrchestrator
from services.song_rename_service.src.suggestions import GeminiSuggestionService, SuggestionClient

__all__ = [
    "BatchOutcome",
    "BatchRenameOrchestrator",
    "BatchStatus",
    "CandidateFile",
    "FileStatus",
    "GeminiSuggestionService",
    "NameSuggestion",
    "ScanResult",
    "ScanStatus",
    "SuggestionClient",
]
