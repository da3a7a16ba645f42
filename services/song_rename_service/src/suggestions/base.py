"""Interface for services that generate song title and artist suggestions."""

from abc import ABC, abstractmethod
from typing import Any


class GenerationError(Exception):
    """Raised by a suggestion service when generation fails."""

    def __init__(self, message: str, rate_limited: bool = False, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: Failure description
            rate_limited: Whether the service refused the call because of rate limits
            status_code: HTTP status code, when the failure came from an HTTP response
        """
        self.message = message
        self.rate_limited = rate_limited
        self.status_code = status_code
        super().__init__(message)


class SuggestionService(ABC):
    """Generates creative song names.

    Implementations return raw items (mappings with ``title`` and ``artist``);
    validation and cardinality checks belong to the SuggestionClient.
    """

    @abstractmethod
    async def generate(self, count: int, style_prompt: str | None = None) -> list[Any]:
        """Generate an ordered list of suggestions.

        Args:
            count: Number of suggestions wanted
            style_prompt: Optional free-text guidance for the naming style

        Returns:
            Ordered list of suggestion items

        Raises:
            GenerationError: If the service fails
        """

    @abstractmethod
    async def suggest_for_file(self, original_name: str) -> Any:
        """Suggest a single new name for a file given its current name.

        Raises:
            GenerationError: If the service fails
        """
