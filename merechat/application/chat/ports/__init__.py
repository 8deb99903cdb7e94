"""Chat Ports."""

from .attachment_storage import AttachmentStoragePort
from .chat_repository import ChatRepositoryPort
from .participant_cache import ParticipantCachePort

__all__ = ["AttachmentStoragePort", "ChatRepositoryPort", "ParticipantCachePort"]
