"""Shared fixtures for backend tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.config import Settings
from bodegoes_assistant.infrastructure.chat_store import SQLiteChatStore


class StubCompletion:
    """Completion provider returning a canned answer and recording prompts."""

    def __init__(self, answer: str = "We open at 11 AM on weekdays.") -> None:
        self.answer = answer
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class FailingCompletion:
    """Completion provider that always fails."""

    def __init__(self) -> None:
        self.calls = 0

    async def complete(self, prompt: str) -> str:
        self.calls += 1
        raise ProviderError("upstream returned 503")


def make_settings(tmp_path: Path, **overrides) -> Settings:
    """Create a Settings instance suitable for tests.

    Uses ``_env_file=None`` so a developer's .env is never loaded.
    """
    values = {
        "openai_api_key": "test-key",
        "openai_chat_model": "gpt-4o",
        "google_places_api_key": "test-places-key",
        "restaurant_place_id": "test-place",
        "chat_db_path": tmp_path / "chat.sqlite",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteChatStore:
    """A SQLiteChatStore connected to a temp database."""
    svc = SQLiteChatStore(db_path=tmp_path / "chat.sqlite")
    svc.connect()
    yield svc
    svc.close()


@pytest.fixture()
def stub_completion() -> StubCompletion:
    return StubCompletion()


@pytest.fixture()
def failing_completion() -> FailingCompletion:
    return FailingCompletion()
