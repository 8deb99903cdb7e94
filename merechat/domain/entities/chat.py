"""Chat Entity - 채팅 도메인 엔티티.

고정된 참여자 집합으로 식별되는 대화.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from merechat.domain.clock import utcnow
from merechat.domain.exceptions.chat import InvalidParticipantsError

# participant_key 구분자 (identity 문자열에 등장하지 않는 제어 문자)
PARTICIPANT_KEY_SEPARATOR = "\x1f"
MIN_PARTICIPANTS = 2


def normalize_participants(participants: list[str]) -> list[str]:
    """중복 제거 (첫 등장 순서 유지)."""
    seen: set[str] = set()
    result: list[str] = []
    for identity in participants:
        if identity in seen:
            continue
        seen.add(identity)
        result.append(identity)
    return result


def make_participant_key(participants: list[str]) -> str:
    """참여자 집합의 정규 키.

    순서와 무관하게 같은 집합이면 같은 키를 만든다.
    """
    return PARTICIPANT_KEY_SEPARATOR.join(sorted(set(participants)))


@dataclass
class Chat:
    """채팅 엔티티.

    Attributes:
        participants: 참여자 identity 목록 (저장 순서 유지, 중복 없음)
        id: 채팅 ID (UUID)
        created_at: 생성 시간
        updated_at: 마지막 메시지 저장 시간
        participant_key: 참여자 집합 정규 키 (정확히 같은 집합 조회용)
    """

    participants: list[str]
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    participant_key: str = field(default="", init=False)

    def __post_init__(self) -> None:
        """참여자 정규화 및 최소 인원 검증."""
        self.participants = normalize_participants(self.participants)
        if len(self.participants) < MIN_PARTICIPANTS:
            raise InvalidParticipantsError()
        self.participant_key = make_participant_key(self.participants)

    def has_participant(self, identity: str) -> bool:
        """참여자 여부."""
        return identity in self.participants

    def touch(self, at: datetime | None = None) -> None:
        """새 메시지 저장 시 활동 시간 갱신."""
        self.updated_at = at or utcnow()
