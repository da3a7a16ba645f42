"""Fixtures for song rename service tests."""

from typing import Any

import pytest

from services.song_rename_service.src.core.scanner import DirectoryScanner
from services.song_rename_service.src.filesystem.memory import InMemoryDirectory
from services.song_rename_service.src.notifications.sinks import CollectingNotificationSink
from services.song_rename_service.src.orchestrator import BatchRenameOrchestrator
from services.song_rename_service.src.suggestions.base import GenerationError, SuggestionService
from services.song_rename_service.src.suggestions.client import SuggestionClient


class FakeSuggestionService(SuggestionService):
    """Suggestion service returning canned items and recording every call."""

    def __init__(
        self,
        songs: list[Any] | None = None,
        single: Any = None,
        error: GenerationError | None = None,
    ) -> None:
        self.songs = songs or []
        self.single = single
        self.error = error
        self.generate_calls: list[tuple[int, str | None]] = []
        self.single_calls: list[str] = []

    async def generate(self, count: int, style_prompt: str | None = None) -> list[Any]:
        self.generate_calls.append((count, style_prompt))
        if self.error:
            raise self.error
        return list(self.songs)

    async def suggest_for_file(self, original_name: str) -> Any:
        self.single_calls.append(original_name)
        if self.error:
            raise self.error
        return self.single


@pytest.fixture
def music_folder() -> InMemoryDirectory:
    """Folder with two audio files, a text file and a sub-directory."""
    return InMemoryDirectory(
        "music",
        files={"a.mp3": b"audio-a", "notes.txt": b"text", "b.wav": b"audio-b"},
        subdirectories=["covers.mp3"],
    )


@pytest.fixture
def fake_service() -> FakeSuggestionService:
    return FakeSuggestionService(songs=[{"title": "X", "artist": "Y"}, {"title": "Q", "artist": "R"}])


@pytest.fixture
def notifications() -> CollectingNotificationSink:
    return CollectingNotificationSink()


@pytest.fixture
def orchestrator(fake_service, notifications) -> BatchRenameOrchestrator:
    return BatchRenameOrchestrator(
        SuggestionClient(fake_service),
        scanner=DirectoryScanner(),
        notifier=notifications,
    )


@pytest.fixture
def make_service():
    """Factory for FakeSuggestionService instances."""
    return FakeSuggestionService
