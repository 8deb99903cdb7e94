"""검증 관련 애플리케이션 예외.

모두 저장소 호출 전에 발생한다.
"""

from merechat.application.common.exceptions.base import ApplicationError


class ValidationError(ApplicationError):
    """요청 검증 실패 (4xx)."""


class InvalidIdError(ValidationError):
    """잘못된 형식의 ID."""

    def __init__(self, field: str = "id") -> None:
        self.field = field
        super().__init__(f"invalid {field}")


class MessageRequiredError(ValidationError):
    """메시지 내용 누락."""

    def __init__(self) -> None:
        super().__init__("content is required")


class ParticipantsMustIncludeSelfError(ValidationError):
    """참여자 목록에 요청자 본인이 없음."""

    def __init__(self) -> None:
        super().__init__("must include yourself")


class InvalidAttachmentError(ValidationError):
    """첨부 파일 누락 또는 읽기 실패."""

    def __init__(self, message: str = "failed to read file") -> None:
        super().__init__(message)
