"""Rename executor pairing selected files with suggestions and renaming them."""

import re
from collections.abc import Callable, Sequence

import structlog

from ..filesystem.base import DirectoryHandle, FileHandle
from .exceptions import RenameError, ServiceError, ValidationError
from .models import BatchOutcome, BatchStatus, CandidateFile, NameSuggestion

logger = structlog.get_logger(__name__)

CANCELLED_MESSAGE = "Rename cancelled"

_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def original_extension(name: str) -> str:
    """Return the extension of a file name including the dot, or an empty string."""
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot:]


def sanitize_component(value: str) -> str:
    return _ILLEGAL_CHARS.sub("_", value).strip()


def build_file_name(suggestion: NameSuggestion, original_name: str) -> str:
    """Build ``"<artist> - <title><ext>"`` keeping the original extension verbatim."""
    artist = sanitize_component(suggestion.artist)
    title = sanitize_component(suggestion.title)
    return f"{artist} - {title}{original_extension(original_name)}"


class RenameExecutor:
    """Renames files one at a time with per-file error isolation.

    Renames are done copy-then-delete through the handle interface: the new file
    is created exclusively, filled with the original bytes and only then is the
    original deleted. A crash between the copy and the delete leaves both files
    on disk.
    """

    async def rename_file(self, directory: DirectoryHandle, candidate: CandidateFile, new_name: str) -> FileHandle:
        """Rename one file inside a directory.

        Args:
            directory: Directory containing the file
            candidate: File to rename
            new_name: Target file name

        Returns:
            Handle to the renamed file (the same handle if the name is unchanged)

        Raises:
            RenameError: If the target exists or any filesystem step fails
        """
        if new_name == candidate.name:
            return candidate.handle

        try:
            target = await directory.create_file(new_name, exclusive=True)
        except FileExistsError as e:
            raise RenameError(candidate.name, f"A file named '{new_name}' already exists") from e
        except OSError as e:
            raise RenameError(candidate.name, f"Could not create '{new_name}': {e}") from e

        try:
            data = await candidate.handle.read()
            await target.write(data)
        except OSError as e:
            await self._discard_partial(directory, new_name)
            raise RenameError(candidate.name, f"Could not copy '{candidate.name}' to '{new_name}': {e}") from e

        try:
            await directory.delete_entry(candidate.name)
        except OSError as e:
            logger.warning(
                "Renamed copy written but original could not be removed",
                original=candidate.name,
                new_name=new_name,
                error=str(e),
            )
            raise RenameError(candidate.name, f"Copied to '{new_name}' but could not remove the original: {e}") from e

        return target

    async def _discard_partial(self, directory: DirectoryHandle, name: str) -> None:
        try:
            await directory.delete_entry(name)
        except OSError as e:
            logger.warning("Failed to remove partial rename target", name=name, error=str(e))

    async def execute(
        self,
        directory: DirectoryHandle,
        files: Sequence[CandidateFile],
        suggestions: Sequence[NameSuggestion],
        is_cancelled: Callable[[], bool] = lambda: False,
        on_change: Callable[[CandidateFile], None] | None = None,
    ) -> BatchOutcome:
        """Rename ``files[i]`` after ``suggestions[i]``, sequentially.

        Every file is moved to RENAMING before the first rename. A failure on one
        file is recorded on that file and processing carries on with the next.

        Args:
            directory: Directory containing the files
            files: Selected files in scan order
            suggestions: Suggestions in the order they were generated
            is_cancelled: Checked before each file; once true the rest are marked cancelled
            on_change: Called with a file after each of its status transitions

        Returns:
            BatchOutcome with success and total counts

        Raises:
            ValidationError: If files is empty
            ServiceError: If the number of suggestions differs from the number of files
        """
        if not files:
            raise ValidationError("Select at least one file to rename")
        if len(suggestions) != len(files):
            raise ServiceError(
                f"AI returned {len(suggestions)} suggestion(s) for {len(files)} file(s); nothing was renamed."
            )

        def changed(candidate: CandidateFile) -> None:
            if on_change is not None:
                on_change(candidate)

        for candidate in files:
            candidate.mark_renaming()
            changed(candidate)

        logger.info("Rename batch started", total=len(files), folder=directory.name)

        success_count = 0
        failures: dict[str, str] = {}
        cancelled = False

        for candidate, suggestion in zip(files, suggestions, strict=True):
            if cancelled or is_cancelled():
                cancelled = True
                candidate.mark_error(CANCELLED_MESSAGE)
                failures[candidate.id] = CANCELLED_MESSAGE
                changed(candidate)
                continue

            original_name = candidate.name
            new_name = build_file_name(suggestion, original_name)
            try:
                handle = await self.rename_file(directory, candidate, new_name)
            except RenameError as e:
                logger.error("Failed to rename file", file=original_name, new_name=new_name, error=e.message)
                candidate.mark_error(e.message)
                failures[candidate.id] = e.message
            except Exception as e:
                logger.error("Unexpected error renaming file", file=original_name, new_name=new_name, error=str(e))
                candidate.mark_error(str(e) or type(e).__name__)
                failures[candidate.id] = candidate.error or ""
            else:
                candidate.mark_renamed(new_name, handle)
                success_count += 1
                logger.info("Renamed file", original=original_name, new_name=new_name)
            changed(candidate)

        status = BatchStatus.CANCELLED if cancelled else BatchStatus.COMPLETED
        logger.info(
            "Rename batch finished",
            status=status.value,
            success_count=success_count,
            total=len(files),
        )
        return BatchOutcome(
            status=status,
            success_count=success_count,
            total_count=len(files),
            failures=failures,
        )
