"""Exception hierarchy for the song rename service."""


class SongRenameError(Exception):
    """Base class for all song rename errors."""


class ValidationError(SongRenameError):
    """Raised when a request is rejected before any external call is made."""


class BatchInProgressError(SongRenameError):
    """Raised when a run, selection change or folder change overlaps an active run."""

    def __init__(self, message: str = "A rename run is already in progress") -> None:
        super().__init__(message)


class FolderPermissionError(SongRenameError, PermissionError):
    """Raised when read/write access to a folder is denied."""

    def __init__(self, folder: str, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            folder: Name of the folder access was denied for
            message: Optional override for the error message
        """
        self.folder = folder
        super().__init__(message or f"Permission to read and write '{folder}' was denied")


class ServiceError(SongRenameError):
    """Raised when name suggestions could not be produced for a whole batch."""

    def __init__(self, message: str, rate_limited: bool = False) -> None:
        """Initialize the error.

        Args:
            message: Human-readable failure description
            rate_limited: Whether the underlying service rejected the call for rate limiting
        """
        self.message = message
        self.rate_limited = rate_limited
        super().__init__(message)


class RateLimitedError(ServiceError):
    """Raised when the suggestion service is rate limiting requests."""

    def __init__(self, message: str = "AI service is busy. Please try again in a moment.") -> None:
        super().__init__(message, rate_limited=True)


class RenameError(SongRenameError):
    """Raised when a single file could not be renamed."""

    def __init__(self, file_name: str, message: str) -> None:
        """Initialize the error.

        Args:
            file_name: Name of the file whose rename failed
            message: Failure description
        """
        self.file_name = file_name
        self.message = message
        super().__init__(message)
