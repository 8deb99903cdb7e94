"""Merechat Domain Entities."""

from merechat.domain.entities.chat import Chat
from merechat.domain.entities.message import Message

__all__ = ["Chat", "Message"]
