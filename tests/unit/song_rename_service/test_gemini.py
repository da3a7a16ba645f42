"""Tests for the Gemini suggestion service."""

import json

import httpx
import pytest

from services.song_rename_service.src.suggestions.base import GenerationError
from services.song_rename_service.src.suggestions.gemini import (
    GeminiSuggestionService,
    build_batch_prompt,
    build_single_prompt,
    parse_model_json,
)


def gemini_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def make_service(handler) -> tuple[GeminiSuggestionService, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return GeminiSuggestionService(api_key="test-key", model="models/gemini-test", client=client), requests


class TestPrompts:
    """Test prompt construction."""

    def test_batch_prompt_with_style(self) -> None:
        prompt = build_batch_prompt(4, "90s grunge")

        assert "Generate 4 unique song titles" in prompt
        assert '"90s grunge"' in prompt
        assert '{"songs": [{"title": "Echoes in Rain", "artist": "Neon Drift"}]}' in prompt

    def test_batch_prompt_without_style(self) -> None:
        assert "follow this instruction" not in build_batch_prompt(2)

    def test_single_prompt(self) -> None:
        assert 'Original Filename: "track01.mp3"' in build_single_prompt("track01.mp3")


class TestParseModelJson:
    """Test parsing of model output."""

    def test_plain_json(self) -> None:
        assert parse_model_json('{"title": "A", "artist": "B"}') == {"title": "A", "artist": "B"}

    def test_fenced_json(self) -> None:
        text = '```json\n{"songs": [{"title": "A", "artist": "B"}]}\n```'
        assert parse_model_json(text) == {"songs": [{"title": "A", "artist": "B"}]}

    def test_invalid_json(self) -> None:
        with pytest.raises(GenerationError) as exc_info:
            parse_model_json("Sure! Here are some names: ...")

        assert exc_info.value.message == "AI returned invalid JSON."


class TestGeminiSuggestionService:
    """Test suite for GeminiSuggestionService."""

    @pytest.mark.asyncio
    async def test_generate(self) -> None:
        songs = [{"title": "Echoes in Rain", "artist": "Neon Drift"}, {"title": "Glass", "artist": "Hollow"}]
        service, requests = make_service(lambda request: gemini_response(json.dumps({"songs": songs})))

        result = await service.generate(2, "dream pop")

        assert result == songs
        request = requests[0]
        assert request.url.path == "/v1beta/models/gemini-test:generateContent"
        assert request.headers["x-goog-api-key"] == "test-key"
        body = json.loads(request.content)
        assert "Generate 2 unique song titles" in body["contents"][0]["parts"][0]["text"]
        assert body["generationConfig"]["responseMimeType"] == "application/json"

    @pytest.mark.asyncio
    async def test_generate_accepts_bare_list(self) -> None:
        service, _ = make_service(lambda request: gemini_response('[{"title": "A", "artist": "B"}]'))

        assert await service.generate(1) == [{"title": "A", "artist": "B"}]

    @pytest.mark.asyncio
    async def test_generate_unexpected_shape(self) -> None:
        service, _ = make_service(lambda request: gemini_response('{"tracks": []}'))

        with pytest.raises(GenerationError):
            await service.generate(1)

    @pytest.mark.asyncio
    async def test_suggest_for_file(self) -> None:
        service, requests = make_service(
            lambda request: gemini_response('```json\n{"title": "Cosmic Drift", "artist": "Starlight Bloom"}\n```')
        )

        result = await service.suggest_for_file("track01.mp3")

        assert result == {"title": "Cosmic Drift", "artist": "Starlight Bloom"}
        assert "track01.mp3" in json.loads(requests[0].content)["contents"][0]["parts"][0]["text"]

    @pytest.mark.asyncio
    async def test_rate_limited_response(self) -> None:
        error_body = {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
        service, _ = make_service(lambda request: httpx.Response(429, json=error_body))

        with pytest.raises(GenerationError) as exc_info:
            await service.generate(3)

        assert exc_info.value.rate_limited is True
        assert exc_info.value.status_code == 429
        assert "Quota exceeded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        service, _ = make_service(lambda request: httpx.Response(500, text="upstream exploded"))

        with pytest.raises(GenerationError) as exc_info:
            await service.generate(1)

        assert exc_info.value.rate_limited is False
        assert exc_info.value.status_code == 500
        assert "upstream exploded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service, _ = make_service(fail)

        with pytest.raises(GenerationError) as exc_info:
            await service.generate(1)

        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_empty_candidates(self) -> None:
        service, _ = make_service(lambda request: httpx.Response(200, json={"candidates": []}))

        with pytest.raises(GenerationError):
            await service.generate(1)

    @pytest.mark.asyncio
    async def test_non_string_text_parts_ignored(self) -> None:
        parts = [{"text": None}, {"text": 42}, {"text": '[{"title": "A", "artist": "B"}]'}]
        service, _ = make_service(
            lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}]})
        )

        assert await service.generate(1) == [{"title": "A", "artist": "B"}]

    @pytest.mark.asyncio
    async def test_null_text_is_generation_error(self) -> None:
        service, _ = make_service(
            lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": None}]}}]})
        )

        with pytest.raises(GenerationError) as exc_info:
            await service.generate(1)

        assert exc_info.value.message == "AI returned an empty response."

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self) -> None:
        service, _ = make_service(lambda request: gemini_response("[]"))

        await service.close()

        assert service._client is not None
        assert not service._client.is_closed
