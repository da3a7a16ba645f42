"""Read-only status view derived from the candidate list."""

from collections.abc import Callable, Sequence
from typing import Any

from .models import CandidateFile, FileStatus


class StatusProjection:
    """Counts and busy flags recomputed from the candidates on every read."""

    def __init__(self, candidates: Callable[[], Sequence[CandidateFile]]) -> None:
        self._candidates = candidates

    @property
    def total_count(self) -> int:
        return len(self._candidates())

    @property
    def selected_count(self) -> int:
        return sum(1 for f in self._candidates() if f.selected)

    @property
    def all_selected(self) -> bool:
        files = self._candidates()
        return len(files) > 0 and all(f.selected for f in files)

    @property
    def is_any_busy(self) -> bool:
        return any(f.status is FileStatus.RENAMING for f in self._candidates())

    @property
    def renamed_count(self) -> int:
        return sum(1 for f in self._candidates() if f.status is FileStatus.RENAMED)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self._candidates() if f.status is FileStatus.ERROR)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_count": self.total_count,
            "selected_count": self.selected_count,
            "all_selected": self.all_selected,
            "is_any_busy": self.is_any_busy,
            "renamed_count": self.renamed_count,
            "error_count": self.error_count,
        }
