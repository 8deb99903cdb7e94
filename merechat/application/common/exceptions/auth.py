"""인증 관련 예외."""

from merechat.application.common.exceptions.base import ApplicationError


class UnauthorizedError(ApplicationError):
    """인증 정보(identity) 누락."""

    def __init__(self) -> None:
        super().__init__("Unauthorized: X-User-ID header is required")
