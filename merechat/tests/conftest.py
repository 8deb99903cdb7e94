"""Merechat 테스트 설정."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from merechat.domain.entities.chat import Chat
from merechat.setup.config import Settings
from merechat.tests.fakes import InMemoryChatRepository


@pytest.fixture
def repository() -> InMemoryChatRepository:
    return InMemoryChatRepository()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        participant_cache_enabled=False,
        upload_dir="/tmp/merechat-test-uploads",
    )


@pytest.fixture
def chat(repository: InMemoryChatRepository) -> Chat:
    """alice, bob 참여 채팅."""
    created = Chat(participants=["alice", "bob"])
    repository.chats[created.id] = created
    return created


@pytest.fixture
def mock_router() -> MagicMock:
    """BroadcastRouter mock."""
    router = MagicMock()
    router.broadcast_to_chat = AsyncMock(return_value=0)
    router.broadcast_global = AsyncMock(return_value=0)
    return router


@pytest.fixture
def mock_participant_cache() -> AsyncMock:
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    return cache
