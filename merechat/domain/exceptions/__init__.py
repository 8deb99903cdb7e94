"""Merechat 도메인 예외."""

from merechat.domain.exceptions.base import DomainError
from merechat.domain.exceptions.chat import ChatNotFoundError, InvalidParticipantsError
from merechat.domain.exceptions.message import MessageNotFoundError

__all__ = [
    "DomainError",
    "ChatNotFoundError",
    "InvalidParticipantsError",
    "MessageNotFoundError",
]
