"""Adapter giving suggestion services a fixed count-in, count-out contract."""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import RateLimitedError, ServiceError
from ..core.models import BatchRequest, NameSuggestion
from .base import GenerationError, SuggestionService

logger = structlog.get_logger(__name__)

RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")


def is_rate_limited(error: GenerationError) -> bool:
    """Classify a service failure as rate limiting."""
    if error.rate_limited or error.status_code == 429:
        return True
    return any(marker in error.message for marker in RATE_LIMIT_MARKERS)


class SuggestionClient:
    """Wraps a SuggestionService and validates what it returns."""

    def __init__(self, service: SuggestionService) -> None:
        self.service = service

    async def generate(self, request: BatchRequest) -> list[NameSuggestion]:
        """Generate exactly ``request.count`` suggestions.

        Args:
            request: Batch request sized to the current selection

        Returns:
            Ordered list of exactly ``request.count`` suggestions

        Raises:
            RateLimitedError: If the service is rate limiting requests
            ServiceError: If generation fails or returns the wrong number of items
        """
        try:
            items = await self.service.generate(request.count, request.style_prompt)
        except GenerationError as e:
            raise self._translate(e) from e
        except Exception as e:
            raise self._unexpected(e) from e

        if items is None or len(items) != request.count:
            received = 0 if items is None else len(items)
            logger.warning("Suggestion count mismatch", requested=request.count, received=received)
            raise ServiceError(
                f"AI returned {received} suggestion(s) for {request.count} file(s); nothing was renamed."
            )

        return [self._coerce(item) for item in items]

    async def suggest_for_file(self, original_name: str) -> NameSuggestion:
        """Suggest a new name for one file based on its current name.

        Raises:
            RateLimitedError: If the service is rate limiting requests
            ServiceError: If generation fails or the result is unusable
        """
        try:
            item = await self.service.suggest_for_file(original_name)
        except GenerationError as e:
            raise self._translate(e) from e
        except Exception as e:
            raise self._unexpected(e) from e

        if item is None:
            raise ServiceError("AI failed to suggest a new name. Please try again.")
        return self._coerce(item)

    def _translate(self, error: GenerationError) -> ServiceError:
        if is_rate_limited(error):
            logger.warning("Suggestion service rate limited", error=error.message)
            return RateLimitedError()
        logger.warning("Suggestion service failed", error=error.message, status_code=error.status_code)
        return ServiceError(f"An unexpected error occurred while contacting the AI service: {error.message}")

    @staticmethod
    def _unexpected(error: Exception) -> ServiceError:
        logger.exception("Suggestion service raised an unexpected error", error=str(error))
        return ServiceError(f"An unexpected error occurred while contacting the AI service: {error}")

    @staticmethod
    def _coerce(item: Any) -> NameSuggestion:
        if isinstance(item, NameSuggestion):
            return item
        if not isinstance(item, Mapping):
            raise ServiceError(f"AI returned an invalid suggestion: {item!r}")
        try:
            return NameSuggestion.model_validate(dict(item))
        except PydanticValidationError as e:
            raise ServiceError(f"AI returned an invalid suggestion: {dict(item)!r}") from e
