"""외부 협력자(저장소, 전송 계층) 실패 예외."""

from merechat.application.common.exceptions.base import ApplicationError


class StoreError(ApplicationError):
    """저장소 호출 실패. 이 계층에서는 재시도하지 않는다."""

    def __init__(self, operation: str, message: str = "store operation failed") -> None:
        self.operation = operation
        super().__init__(message)


class AttachmentStorageError(ApplicationError):
    """첨부 파일 저장 실패."""

    def __init__(self, message: str = "cannot save file") -> None:
        super().__init__(message)


class TransportError(ApplicationError):
    """단일 연결에 대한 읽기/쓰기 실패."""

    def __init__(self, message: str = "transport error") -> None:
        super().__init__(message)
