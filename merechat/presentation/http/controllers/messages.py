"""Message API Controller.

- PATCH  /messages/{message_id}        내용 수정 (작성자 본인만)
- DELETE /messages/{message_id}        soft delete (작성자 본인만)
- POST   /messages/{message_id}/read   읽음 처리 (idempotent)
- GET    /messages/unread-count        채팅별 안 읽은 메시지 수
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from pydantic import Field

from merechat.application.chat.dto import UnreadCountView
from merechat.application.common.ids import parse_id
from merechat.application.common.schema import CamelModel
from merechat.presentation.http.auth import CurrentUser
from merechat.setup.dependencies import (
    DeleteMessageCommandDep,
    EditMessageCommandDep,
    MarkReadCommandDep,
    UnreadCountsQueryDep,
)

router = APIRouter(prefix="/messages", tags=["messages"])


class EditMessageRequest(CamelModel):
    """메시지 수정 요청."""

    content: str = Field(default="", description="새 내용")


@router.get("/unread-count", response_model=list[UnreadCountView])
async def unread_count(user: CurrentUser, query: UnreadCountsQueryDep) -> list[UnreadCountView]:
    """참여 중인 모든 채팅의 안 읽은 메시지 수 (0 포함)."""
    return await query.execute(user)


@router.patch("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def edit_message(
    message_id: str,
    body: EditMessageRequest,
    user: CurrentUser,
    command: EditMessageCommandDep,
) -> Response:
    await command.execute(parse_id(message_id, "messageId"), user, body.content)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: str,
    user: CurrentUser,
    command: DeleteMessageCommandDep,
) -> Response:
    await command.execute(parse_id(message_id, "messageId"), user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    message_id: str,
    user: CurrentUser,
    command: MarkReadCommandDep,
) -> Response:
    await command.execute(parse_id(message_id, "messageId"), user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
