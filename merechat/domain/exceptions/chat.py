"""Chat 도메인 예외."""

from merechat.domain.exceptions.base import DomainError


class ChatNotFoundError(DomainError):
    """채팅을 찾을 수 없음 (존재하지 않거나 참여자가 아님)."""

    def __init__(self, chat_id: str | None = None) -> None:
        self.chat_id = chat_id
        super().__init__("Chat not found")


class InvalidParticipantsError(DomainError):
    """채팅 참여자 구성이 유효하지 않음."""

    def __init__(self, message: str = "a chat needs at least 2 distinct participants") -> None:
        super().__init__(message)
