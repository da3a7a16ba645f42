"""Batch rename orchestrator holding the candidate list for a UI host."""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from .core.exceptions import BatchInProgressError, FolderPermissionError, ServiceError, ValidationError
from .core.executor import RenameExecutor
from .core.models import (
    BatchOutcome,
    BatchRequest,
    BatchStatus,
    CandidateFile,
    NameSuggestion,
    ScanResult,
    ScanStatus,
)
from .core.projection import StatusProjection
from .core.scanner import DirectoryScanner
from .core.selection import SelectionModel
from .filesystem.base import DirectoryHandle
from .notifications.base import Notification, NotificationSink, Severity
from .notifications.sinks import LoggingNotificationSink
from .suggestions.client import SuggestionClient

logger = structlog.get_logger(__name__)

StatusCallback = Callable[[CandidateFile], None]


class BatchRenameOrchestrator:
    """Owns the candidate list and drives scans, selection and rename runs.

    At most one run (batch or single file) is in flight at a time. While it runs,
    selection changes, folder changes and further runs raise BatchInProgressError.
    Hosts observe progress through ``subscribe`` and read counts from ``status``.
    """

    def __init__(
        self,
        suggestion_client: SuggestionClient,
        scanner: DirectoryScanner | None = None,
        executor: RenameExecutor | None = None,
        notifier: NotificationSink | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            suggestion_client: Adapter used to request name suggestions
            scanner: Directory scanner (defaults to the standard audio extensions)
            executor: Rename executor
            notifier: Sink for scan and batch notifications (defaults to the log)
        """
        self.suggestion_client = suggestion_client
        self.scanner = scanner or DirectoryScanner()
        self.executor = executor or RenameExecutor()
        self.notifier = notifier or LoggingNotificationSink()

        self.directory: DirectoryHandle | None = None
        self._candidates: list[CandidateFile] = []
        self._run_lock = asyncio.Lock()
        self._cancel_requested = False
        self._subscribers: list[StatusCallback] = []

        self.selection = SelectionModel(lambda: self._candidates, lambda: self.is_running)
        self.status = StatusProjection(lambda: self._candidates)

    @property
    def candidates(self) -> tuple[CandidateFile, ...]:
        return tuple(self._candidates)

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def get(self, file_id: str) -> CandidateFile:
        for candidate in self._candidates:
            if candidate.id == file_id:
                return candidate
        raise ValidationError(f"No file with id '{file_id}'")

    def subscribe(self, callback: StatusCallback) -> Callable[[], None]:
        """Register a callback for file status transitions.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, candidate: CandidateFile) -> None:
        for callback in list(self._subscribers):
            try:
                callback(candidate)
            except Exception as e:
                logger.error("Status subscriber failed", file=candidate.id, error=str(e))

    def _notify(self, severity: Severity, title: str, description: str) -> None:
        try:
            self.notifier.notify(Notification(severity, title, description))
        except Exception as e:
            logger.error("Notification sink failed", title=title, error=str(e))

    def _ensure_idle(self) -> None:
        if self.is_running:
            raise BatchInProgressError("Cannot open a folder while a rename run is in progress")

    async def open_folder(self, directory: DirectoryHandle) -> ScanResult:
        """Scan a folder and replace the candidate list with its audio files.

        Raises:
            BatchInProgressError: If a run is in flight
        """
        self._ensure_idle()

        try:
            result = await self.scanner.scan(directory)
        except FolderPermissionError as e:
            self._ensure_idle()
            self.directory = None
            self._candidates = []
            self._notify(Severity.ERROR, "Permission Denied", str(e))
            return ScanResult(status=ScanStatus.PERMISSION_DENIED, error=str(e))

        # A run may have started while the scan was suspended.
        self._ensure_idle()
        self.directory = directory
        self._candidates = list(result.candidates)

        if result.status is ScanStatus.NO_MATCHES:
            self._notify(
                Severity.WARNING,
                "No Audio Files Found",
                f"No supported audio files were found in '{directory.name}'.",
            )
        else:
            self._notify(
                Severity.INFO,
                "Folder Loaded",
                f"Found {result.found} audio file(s) in '{directory.name}'.",
            )
        return result

    def toggle(self, file_id: str) -> CandidateFile:
        return self.selection.toggle(file_id)

    def toggle_all(self) -> bool:
        return self.selection.toggle_all()

    def cancel(self) -> bool:
        """Ask the running batch to stop before its next file.

        Returns:
            True if a run was in flight to receive the request
        """
        if not self.is_running:
            return False
        self._cancel_requested = True
        logger.info("Cancellation requested")
        return True

    async def run_batch(self, style_prompt: str | None = None) -> BatchOutcome:
        """Rename every selected file after a freshly generated batch of suggestions.

        Args:
            style_prompt: Optional free-text naming style

        Returns:
            BatchOutcome; service failures are reported here rather than raised

        Raises:
            ValidationError: If nothing is selected
            BatchInProgressError: If a run is already in flight
        """
        if self.is_running:
            raise BatchInProgressError()

        selected = [c for c in self._candidates if c.selected]
        request = BatchRequest.for_selection(len(selected), style_prompt)

        async with self._run_lock:
            self._cancel_requested = False
            return await self._run(selected, lambda: self.suggestion_client.generate(request))

    async def rename_file(self, file_id: str) -> BatchOutcome:
        """Rename a single file after a suggestion based on its current name.

        Raises:
            ValidationError: If the id is unknown
            BatchInProgressError: If a run is already in flight
        """
        if self.is_running:
            raise BatchInProgressError()

        candidate = self.get(file_id)

        async def suggest() -> list[NameSuggestion]:
            return [await self.suggestion_client.suggest_for_file(candidate.name)]

        async with self._run_lock:
            self._cancel_requested = False
            return await self._run([candidate], suggest)

    async def _run(
        self,
        selected: list[CandidateFile],
        suggest: Callable[[], Awaitable[list[NameSuggestion]]],
    ) -> BatchOutcome:
        directory = self.directory
        if directory is None:
            raise ValidationError("Open a folder before renaming")

        total = len(selected)
        try:
            suggestions = await suggest()
            if self._cancel_requested:
                return self._finish(BatchOutcome(BatchStatus.CANCELLED, 0, total, error="Rename cancelled"))
            outcome = await self.executor.execute(
                directory,
                selected,
                suggestions,
                is_cancelled=lambda: self._cancel_requested,
                on_change=self._publish,
            )
        except ServiceError as e:
            outcome = BatchOutcome(BatchStatus.FAILED, 0, total, error=e.message, rate_limited=e.rate_limited)
        return self._finish(outcome)

    def _finish(self, outcome: BatchOutcome) -> BatchOutcome:
        self._cancel_requested = False
        if outcome.status is BatchStatus.FAILED:
            title = "AI Service Busy" if outcome.rate_limited else "Operation Failed"
            self._notify(Severity.ERROR, title, outcome.error or "Unknown error")
        elif outcome.status is BatchStatus.CANCELLED:
            self._notify(
                Severity.WARNING,
                "Rename Cancelled",
                f"Renamed {outcome.success_count} of {outcome.total_count} file(s) before cancelling.",
            )
        elif outcome.success_count == outcome.total_count:
            self._notify(
                Severity.SUCCESS,
                "Rename Complete",
                f"Successfully renamed {outcome.success_count} of {outcome.total_count} file(s).",
            )
        else:
            self._notify(
                Severity.WARNING,
                "Rename Finished With Errors",
                f"Successfully renamed {outcome.success_count} of {outcome.total_count} file(s).",
            )
        logger.info("Rename run settled", **outcome.to_dict())
        return outcome
