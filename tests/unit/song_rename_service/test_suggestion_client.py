"""Tests for the suggestion client adapter."""

import pytest

from services.song_rename_service.src.core.exceptions import RateLimitedError, ServiceError
from services.song_rename_service.src.core.models import BatchRequest, NameSuggestion
from services.song_rename_service.src.suggestions.base import GenerationError
from services.song_rename_service.src.suggestions.client import SuggestionClient, is_rate_limited


class TestSuggestionClient:
    """Test suite for SuggestionClient."""

    @pytest.mark.asyncio
    async def test_generate_exact_count(self, fake_service) -> None:
        """Test the requested count and style are passed through and items validated."""
        client = SuggestionClient(fake_service)

        suggestions = await client.generate(BatchRequest.for_selection(2, "lofi"))

        assert fake_service.generate_calls == [(2, "lofi")]
        assert suggestions == [NameSuggestion(title="X", artist="Y"), NameSuggestion(title="Q", artist="R")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("returned", [1, 3])
    async def test_wrong_cardinality_is_service_error(self, make_service, returned: int) -> None:
        """Test fewer or more items than requested fails the whole batch."""
        service = make_service(songs=[{"title": f"T{i}", "artist": "A"} for i in range(returned)])
        client = SuggestionClient(service)

        with pytest.raises(ServiceError) as exc_info:
            await client.generate(BatchRequest.for_selection(2))

        assert not isinstance(exc_info.value, RateLimitedError)
        assert f"{returned} suggestion(s) for 2 file(s)" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_item_is_service_error(self, make_service) -> None:
        service = make_service(songs=[{"title": "Only title"}])

        with pytest.raises(ServiceError):
            await SuggestionClient(service).generate(BatchRequest.for_selection(1))

    @pytest.mark.asyncio
    async def test_non_mapping_item_is_service_error(self, make_service) -> None:
        service = make_service(songs=["Artist - Title"])

        with pytest.raises(ServiceError):
            await SuggestionClient(service).generate(BatchRequest.for_selection(1))

    @pytest.mark.asyncio
    async def test_rate_limit_classified(self, make_service) -> None:
        service = make_service(error=GenerationError("quota", rate_limited=True))

        with pytest.raises(RateLimitedError) as exc_info:
            await SuggestionClient(service).generate(BatchRequest.for_selection(1))

        assert exc_info.value.rate_limited is True
        assert "try again" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_generic_failure(self, make_service) -> None:
        service = make_service(error=GenerationError("AI returned invalid JSON."))

        with pytest.raises(ServiceError) as exc_info:
            await SuggestionClient(service).generate(BatchRequest.for_selection(1))

        assert exc_info.value.rate_limited is False
        assert "AI returned invalid JSON." in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["generate", "suggest_for_file"])
    async def test_unexpected_exception_is_service_error(self, make_service, method: str) -> None:
        """Test exceptions other than GenerationError still surface as a typed failure."""
        service = make_service()
        service.error = ConnectionError("socket reset")
        client = SuggestionClient(service)

        with pytest.raises(ServiceError) as exc_info:
            if method == "generate":
                await client.generate(BatchRequest.for_selection(1))
            else:
                await client.suggest_for_file("a.mp3")

        assert not isinstance(exc_info.value, RateLimitedError)
        assert "socket reset" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_suggest_for_file(self, make_service) -> None:
        service = make_service(single={"title": "Cosmic Drift", "artist": "Starlight Bloom"})

        suggestion = await SuggestionClient(service).suggest_for_file("track01.mp3")

        assert service.single_calls == ["track01.mp3"]
        assert suggestion == NameSuggestion(title="Cosmic Drift", artist="Starlight Bloom")

    @pytest.mark.asyncio
    async def test_suggest_for_file_empty_result(self, make_service) -> None:
        with pytest.raises(ServiceError):
            await SuggestionClient(make_service(single=None)).suggest_for_file("a.mp3")


class TestRateLimitClassification:
    """Test is_rate_limited."""

    @pytest.mark.parametrize(
        "error",
        [
            GenerationError("busy", rate_limited=True),
            GenerationError("Too Many Requests", status_code=429),
            GenerationError("[429] upstream said no"),
            GenerationError("RESOURCE_EXHAUSTED: quota exceeded"),
        ],
    )
    def test_rate_limited(self, error: GenerationError) -> None:
        assert is_rate_limited(error)

    def test_not_rate_limited(self) -> None:
        assert not is_rate_limited(GenerationError("500 INTERNAL: oops", status_code=500))
