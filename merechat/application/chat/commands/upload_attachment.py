"""Upload Attachment Command - 첨부 파일 저장.

저장 파일명은 고유 ID + 원본 확장자.
반환 descriptor: {id, url, type}
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import TYPE_CHECKING, BinaryIO
from uuid import UUID, uuid4

from merechat.application.chat.access import load_member_chat
from merechat.application.chat.dto import AttachmentView
from merechat.application.common.exceptions.validation import InvalidAttachmentError

if TYPE_CHECKING:
    from merechat.application.chat.ports.attachment_storage import AttachmentStoragePort
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort

logger = logging.getLogger(__name__)


class UploadAttachmentCommand:
    """첨부 파일 업로드 Command."""

    def __init__(
        self,
        repository: "ChatRepositoryPort",
        storage: "AttachmentStoragePort",
    ) -> None:
        self._repository = repository
        self._storage = storage

    async def execute(
        self,
        chat_id: UUID,
        uploader: str,
        filename: str | None,
        content_type: str | None,
        stream: BinaryIO,
    ) -> AttachmentView:
        """
        Raises:
            InvalidAttachmentError: 파일명 누락
            ChatNotFoundError: 채팅이 없거나 참여자가 아님
            AttachmentStorageError: 저장 실패
        """
        if not filename:
            raise InvalidAttachmentError()

        await load_member_chat(self._repository, chat_id, uploader)

        # 경로 구성요소는 버리고 확장자만 사용
        extension = PurePath(filename).suffix
        stored_name = f"{uuid4()}{extension}"
        url = await self._storage.save(stored_name, stream)

        attachment = AttachmentView(id=str(uuid4()), url=url, type=content_type or "")
        logger.info(
            "attachment_uploaded",
            extra={
                "chat_id": str(chat_id),
                "uploader": uploader,
                "attachment_id": attachment.id,
                "content_type": attachment.type,
            },
        )
        return attachment
