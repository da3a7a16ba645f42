"""Name suggestion services and the client adapter around them."""

from .base import GenerationError, SuggestionService
from .client import SuggestionClient, is_rate_limited
from .gemini import GeminiSuggestionService

__all__ = [
    "GeminiSuggestionService",
    "GenerationError",
    "SuggestionClient",
    "SuggestionService",
    "is_rate_limited",
]
