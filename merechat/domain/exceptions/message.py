"""Message 도메인 예외."""

from merechat.domain.exceptions.base import DomainError


class MessageNotFoundError(DomainError):
    """메시지를 찾을 수 없음.

    존재하지 않는 경우와 권한이 없는 경우를 구분하지 않는다.
    """

    def __init__(self, message_id: str | None = None) -> None:
        self.message_id = message_id
        super().__init__("not found or no permission")
