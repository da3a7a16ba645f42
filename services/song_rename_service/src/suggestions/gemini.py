"""Gemini-backed suggestion service using the generateContent REST API."""

import json
import re
from typing import Any

import httpx
import structlog

from .base import GenerationError, SuggestionService

logger = structlog.get_logger(__name__)

BATCH_PROMPT = """You are a music expert, skilled at creating realistic-sounding song titles and artist names.
{style}
Generate {count} unique song titles and artist names. Ensure that the titles and names sound believable \
and could plausibly exist in the modern music landscape.

Format the output as a JSON object with a "songs" key, which contains an array of objects, each with a \
"title" and "artist" field.
Example: {{"songs": [{{"title": "Echoes in Rain", "artist": "Neon Drift"}}]}}"""

STYLE_INSTRUCTION = 'You will follow this instruction to generate the song titles and artists: "{prompt}"\n'

SINGLE_PROMPT = """You are a creative genius who is an expert at naming music tracks. You will be given an \
original filename for an audio file.

Your task is to come up with a completely new, creative, and plausible-sounding song title and artist name. \
The names should sound like they could be real.

Original Filename: "{original_name}"

Generate a new song title and a new artist name.

Respond with a JSON object with "title" and "artist" keys.
Example: {{"title": "Cosmic Drift", "artist": "Starlight Bloom"}}"""

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def build_batch_prompt(count: int, style_prompt: str | None = None) -> str:
    style = STYLE_INSTRUCTION.format(prompt=style_prompt) if style_prompt else ""
    return BATCH_PROMPT.format(count=count, style=style)


def build_single_prompt(original_name: str) -> str:
    return SINGLE_PROMPT.format(original_name=original_name)


def parse_model_json(text: str) -> Any:
    """Parse model output that may be wrapped in markdown code fences.

    Raises:
        GenerationError: If the cleaned text is not valid JSON
    """
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response", response=cleaned[:500])
        raise GenerationError("AI returned invalid JSON.") from e


class GeminiSuggestionService(SuggestionService):
    """Suggestion service talking to the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            api_key: Gemini API key
            model: Model name, without the ``models/`` prefix
            base_url: API base URL
            timeout: Request timeout in seconds for the owned client
            client: Optional pre-configured client; it is not closed by ``close()``
        """
        self.api_key = api_key
        self.model = model.removeprefix("models/")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def generate(self, count: int, style_prompt: str | None = None) -> list[Any]:
        payload = await self._generate_json(build_batch_prompt(count, style_prompt))
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("songs"), list):
            songs: list[Any] = payload["songs"]
            return songs
        raise GenerationError("AI failed to generate new song names.")

    async def suggest_for_file(self, original_name: str) -> Any:
        payload = await self._generate_json(build_single_prompt(original_name))
        if not isinstance(payload, dict):
            raise GenerationError("AI failed to suggest a new name. Please try again.")
        return payload

    async def _generate_json(self, prompt: str) -> Any:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

        try:
            response = await self._get_client().post(url, json=body, headers={"x-goog-api-key": self.api_key})
        except httpx.HTTPError as e:
            logger.error("Gemini request failed", model=self.model, error=str(e))
            raise GenerationError(f"Request to AI service failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(response)

        return parse_model_json(self._extract_text(response))

    @staticmethod
    def _error_from_response(response: httpx.Response) -> GenerationError:
        status = ""
        message = response.text
        try:
            error = response.json().get("error", {})
            status = error.get("status", "")
            message = error.get("message", message)
        except (ValueError, AttributeError):
            pass

        rate_limited = response.status_code == 429 or status == "RESOURCE_EXHAUSTED"
        logger.warning(
            "Gemini returned an error",
            status_code=response.status_code,
            status=status,
            rate_limited=rate_limited,
        )
        detail = f"{status}: {message}" if status else message
        return GenerationError(
            f"{response.status_code} {detail}".strip(),
            rate_limited=rate_limited,
            status_code=response.status_code,
        )

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        try:
            data = response.json()
            parts = data["candidates"][0]["content"]["parts"]
            texts = [part.get("text") for part in parts if isinstance(part, dict)]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationError("AI returned an unexpected response.") from e
        text = "".join(t for t in texts if isinstance(t, str))
        if not text.strip():
            raise GenerationError("AI returned an empty response.")
        return text
