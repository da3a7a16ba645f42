"""Selection state transitions over the candidate list."""

from collections.abc import Callable, Sequence

from .exceptions import BatchInProgressError, ValidationError
from .models import CandidateFile


class SelectionModel:
    """Toggles the ``selected`` flag of candidate files.

    Only the ``selected`` field is ever touched. Every change is refused while
    ``is_locked`` reports an active rename run.
    """

    def __init__(
        self,
        candidates: Callable[[], Sequence[CandidateFile]],
        is_locked: Callable[[], bool] = lambda: False,
    ) -> None:
        self._candidates = candidates
        self._is_locked = is_locked

    @property
    def all_selected(self) -> bool:
        files = self._candidates()
        return len(files) > 0 and all(f.selected for f in files)

    def _check_unlocked(self) -> None:
        if self._is_locked():
            raise BatchInProgressError("Selection cannot change while a rename run is in progress")

    def toggle(self, file_id: str) -> CandidateFile:
        """Flip the selection of one file.

        Raises:
            BatchInProgressError: If a run is in flight
            ValidationError: If no file has the given id
        """
        self._check_unlocked()
        for candidate in self._candidates():
            if candidate.id == file_id:
                candidate.selected = not candidate.selected
                return candidate
        raise ValidationError(f"No file with id '{file_id}'")

    def set_all(self, selected: bool) -> None:
        self._check_unlocked()
        for candidate in self._candidates():
            candidate.selected = selected

    def toggle_all(self) -> bool:
        """Select everything, or deselect everything if all are already selected.

        Returns:
            The new selection value applied to every file
        """
        selected = not self.all_selected
        self.set_all(selected)
        return selected
