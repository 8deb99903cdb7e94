"""Local Attachment Storage - 로컬 디렉터리에 첨부 파일 저장.

저장된 파일은 {public_prefix}/{stored_name} 경로로 정적 서빙된다.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from merechat.application.chat.ports.attachment_storage import AttachmentStoragePort
from merechat.application.common.exceptions.infrastructure import AttachmentStorageError

logger = logging.getLogger(__name__)


class LocalAttachmentStorage(AttachmentStoragePort):
    """파일시스템 기반 첨부 파일 저장소."""

    def __init__(self, upload_dir: str | Path, public_prefix: str = "/static") -> None:
        self._upload_dir = Path(upload_dir)
        self._public_prefix = public_prefix.rstrip("/")

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    async def save(self, stored_name: str, stream: BinaryIO) -> str:
        target = self._upload_dir / stored_name
        try:
            await run_in_threadpool(self._write, target, stream)
        except OSError as e:
            logger.error(
                "attachment_save_failed",
                extra={"stored_name": stored_name, "error": str(e)},
            )
            raise AttachmentStorageError() from e
        return f"{self._public_prefix}/{stored_name}"

    def _write(self, target: Path, stream: BinaryIO) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as out:
            shutil.copyfileobj(stream, out)
