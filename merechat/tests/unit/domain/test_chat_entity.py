"""Chat Entity Unit Tests."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from merechat.domain.entities.chat import Chat, make_participant_key, normalize_participants
from merechat.domain.exceptions.chat import InvalidParticipantsError


class TestChatEntity:
    """Chat 엔티티 테스트."""

    def test_chat_creation_with_defaults(self) -> None:
        chat = Chat(participants=["alice", "bob"])

        assert isinstance(chat.id, UUID)
        assert chat.participants == ["alice", "bob"]
        assert chat.created_at.tzinfo is not None
        assert chat.participant_key == make_participant_key(["alice", "bob"])

    def test_duplicates_removed_keeping_first_occurrence(self) -> None:
        chat = Chat(participants=["bob", "alice", "bob"])

        assert chat.participants == ["bob", "alice"]

    def test_less_than_two_distinct_participants_rejected(self) -> None:
        with pytest.raises(InvalidParticipantsError):
            Chat(participants=["alice", "alice"])

        with pytest.raises(InvalidParticipantsError):
            Chat(participants=[])

    def test_participant_key_is_order_independent(self) -> None:
        """순서가 달라도 같은 집합이면 같은 키."""
        assert Chat(participants=["a", "b", "c"]).participant_key == Chat(
            participants=["c", "a", "b"]
        ).participant_key

    def test_participant_key_differs_for_superset(self) -> None:
        assert make_participant_key(["a", "b"]) != make_participant_key(["a", "b", "c"])

    def test_has_participant(self) -> None:
        chat = Chat(participants=["alice", "bob"])

        assert chat.has_participant("alice") is True
        assert chat.has_participant("carol") is False

    def test_touch_updates_updated_at(self) -> None:
        chat = Chat(participants=["alice", "bob"])
        later = datetime.now(timezone.utc) + timedelta(minutes=5)

        chat.touch(later)

        assert chat.updated_at == later


def test_normalize_participants_preserves_order() -> None:
    assert normalize_participants(["c", "a", "c", "b", "a"]) == ["c", "a", "b"]
