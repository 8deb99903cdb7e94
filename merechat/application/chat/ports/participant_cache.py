"""Participant Cache Port - 채팅 참여자 캐시 추상화.

참여자 집합은 채팅 생성 후 변하지 않으므로 고정 TTL 캐시로 충분하다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID


class ParticipantCachePort(ABC):
    """채팅 참여자 캐시 Port."""

    @abstractmethod
    async def get(self, chat_id: UUID) -> list[str] | None:
        """캐시된 참여자 목록. miss면 None."""
        ...

    @abstractmethod
    async def set(self, chat_id: UUID, participants: list[str]) -> None:
        """참여자 목록 저장 (고정 TTL)."""
        ...
