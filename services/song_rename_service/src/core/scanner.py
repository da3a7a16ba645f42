"""Directory scanner for detecting candidate audio files."""

from collections.abc import Iterable

import structlog

from ..filesystem.base import DirectoryHandle, EntryKind, FileHandle, PermissionMode, PermissionState
from .exceptions import FolderPermissionError
from .models import CandidateFile, ScanResult, ScanStatus

logger = structlog.get_logger(__name__)

DEFAULT_EXTENSIONS: frozenset[str] = frozenset({".mp3", ".wav", ".flac", ".ogg"})


class DirectoryScanner:
    """Scans a directory handle for supported audio files."""

    def __init__(self, supported_extensions: Iterable[str] | None = None) -> None:
        """Initialize the scanner.

        Args:
            supported_extensions: Extensions to accept, with or without the leading dot
        """
        extensions = supported_extensions if supported_extensions is not None else DEFAULT_EXTENSIONS
        self.supported_extensions = frozenset(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions
        )

    def is_audio_file(self, name: str) -> bool:
        """Check if a file name has a supported audio extension."""
        dot = name.rfind(".")
        if dot <= 0:
            return False
        return name[dot:].lower() in self.supported_extensions

    async def ensure_access(self, directory: DirectoryHandle) -> None:
        """Make sure read/write access to the directory is granted.

        The current state is queried first, then read/write access is requested
        even when the query already reports it granted.

        Raises:
            FolderPermissionError: If the permission is denied
        """
        state = await directory.query_permission(PermissionMode.READWRITE)
        logger.debug("Folder permission queried", folder=directory.name, state=state.value)
        state = await directory.request_permission(PermissionMode.READWRITE)
        if state is not PermissionState.GRANTED:
            logger.warning("Folder permission denied", folder=directory.name, state=state.value)
            raise FolderPermissionError(directory.name)

    async def scan(self, directory: DirectoryHandle) -> ScanResult:
        """Scan a directory for candidate audio files.

        Args:
            directory: Directory to scan; read/write permission is requested first

        Returns:
            ScanResult with candidates in listing order, or NO_MATCHES when none qualify

        Raises:
            FolderPermissionError: If access is denied
        """
        await self.ensure_access(directory)

        try:
            entries = await directory.list_entries()
        except PermissionError as e:
            raise FolderPermissionError(directory.name, str(e)) from e

        candidates: list[CandidateFile] = []
        skipped = 0
        for entry in entries:
            if entry.kind is not EntryKind.FILE or not isinstance(entry.handle, FileHandle):
                skipped += 1
                continue
            if not self.is_audio_file(entry.name):
                skipped += 1
                continue
            candidates.append(CandidateFile.from_handle(entry.handle))

        logger.info(
            "Scan completed",
            folder=directory.name,
            candidates=len(candidates),
            skipped=skipped,
        )

        status = ScanStatus.OK if candidates else ScanStatus.NO_MATCHES
        return ScanResult(status=status, candidates=candidates, skipped=skipped)
