"""Attachment Storage Port - 첨부 파일 저장소 추상화."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class AttachmentStoragePort(ABC):
    """첨부 파일 저장소 Port."""

    @abstractmethod
    async def save(self, stored_name: str, stream: BinaryIO) -> str:
        """파일 저장.

        Args:
            stored_name: 저장할 파일명 (고유)
            stream: 파일 내용

        Returns:
            공개 URL

        Raises:
            AttachmentStorageError: 저장 실패
        """
        ...
