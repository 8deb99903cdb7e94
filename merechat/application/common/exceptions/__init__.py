"""Merechat 애플리케이션 예외."""

from merechat.application.common.exceptions.auth import UnauthorizedError
from merechat.application.common.exceptions.base import ApplicationError
from merechat.application.common.exceptions.infrastructure import (
    AttachmentStorageError,
    StoreError,
    TransportError,
)
from merechat.application.common.exceptions.validation import (
    InvalidAttachmentError,
    InvalidIdError,
    MessageRequiredError,
    ParticipantsMustIncludeSelfError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "AttachmentStorageError",
    "InvalidAttachmentError",
    "InvalidIdError",
    "MessageRequiredError",
    "ParticipantsMustIncludeSelfError",
    "StoreError",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
]
