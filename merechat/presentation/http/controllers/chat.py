"""Chat API Controller.

RESTful 엔드포인트:
- GET    /chats                        참여 중인 채팅 목록
- POST   /chats                        채팅 시작 (같은 참여자 집합이면 기존 채팅)
- GET    /chats/{chat_id}              채팅 상세
- GET    /chats/{chat_id}/messages     메시지 목록 (limit, skip)
- POST   /chats/{chat_id}/message      메시지 전송 → 저장 후 브로드캐스트
- POST   /chats/{chat_id}/upload       첨부 파일 업로드 (multipart "file")
- GET    /chats/{chat_id}/search       메시지 검색 (term, limit, skip)

실시간 이벤트는 WebSocket /ws/chat에서 처리.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile
from pydantic import Field

from merechat.application.chat.dto import AttachmentView, ChatView, MessageView
from merechat.application.common.ids import parse_id
from merechat.application.common.schema import CamelModel
from merechat.presentation.http.auth import CurrentUser
from merechat.setup.dependencies import (
    GetChatQueryDep,
    GetMessagesQueryDep,
    ListChatsQueryDep,
    SearchMessagesQueryDep,
    SendMessageCommandDep,
    StartChatCommandDep,
    UploadAttachmentCommandDep,
)

router = APIRouter(prefix="/chats", tags=["chats"])
logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Request Schemas
# ─────────────────────────────────────────────────────────────────────────────


class StartChatRequest(CamelModel):
    """채팅 시작 요청."""

    participants: list[str] = Field(description="참여자 identity 목록 (본인 포함)")


class SendMessageRequest(CamelModel):
    """메시지 전송 요청."""

    content: str = Field(default="", description="메시지 내용")


# ─────────────────────────────────────────────────────────────────────────────
# Endpoints
# ─────────────────────────────────────────────────────────────────────────────


@router.get("", response_model=list[ChatView])
async def list_chats(user: CurrentUser, query: ListChatsQueryDep) -> list[ChatView]:
    """참여 중인 채팅 목록 (최근 활동 순)."""
    chats = await query.execute(user)
    return [ChatView.from_entity(chat) for chat in chats]


@router.post("", response_model=ChatView)
async def start_chat(
    body: StartChatRequest,
    user: CurrentUser,
    command: StartChatCommandDep,
) -> ChatView:
    """채팅 시작.

    같은 참여자 집합(순서 무관)의 채팅이 이미 있으면 그 채팅을 반환합니다.
    """
    chat = await command.execute(user, body.participants)
    return ChatView.from_entity(chat)


@router.get("/{chat_id}", response_model=ChatView)
async def get_chat(chat_id: str, user: CurrentUser, query: GetChatQueryDep) -> ChatView:
    chat = await query.execute(parse_id(chat_id, "chatId"), user)
    return ChatView.from_entity(chat)


@router.get("/{chat_id}/messages", response_model=list[MessageView])
async def get_messages(
    chat_id: str,
    user: CurrentUser,
    query: GetMessagesQueryDep,
    limit: Annotated[str | None, Query(description="조회 개수 (기본 50)")] = None,
    skip: Annotated[str | None, Query(description="건너뛸 개수 (기본 0)")] = None,
) -> list[MessageView]:
    """메시지 목록 (오래된 순)."""
    messages = await query.execute(parse_id(chat_id, "chatId"), user, limit=limit, skip=skip)
    return [MessageView.from_entity(message) for message in messages]


@router.post("/{chat_id}/message", response_model=MessageView)
async def send_message(
    chat_id: str,
    body: SendMessageRequest,
    user: CurrentUser,
    command: SendMessageCommandDep,
) -> MessageView:
    """메시지 전송.

    저장 후 채팅 참여자 중 연결된 peer에게 message 이벤트를 브로드캐스트합니다.
    """
    message = await command.execute(parse_id(chat_id, "chatId"), user, body.content)
    return MessageView.from_entity(message)


@router.post("/{chat_id}/upload", response_model=AttachmentView)
async def upload_attachment(
    chat_id: str,
    user: CurrentUser,
    command: UploadAttachmentCommandDep,
    file: Annotated[UploadFile, File(description="첨부 파일")],
) -> AttachmentView:
    parsed_chat_id = parse_id(chat_id, "chatId")
    return await command.execute(
        chat_id=parsed_chat_id,
        uploader=user,
        filename=file.filename,
        content_type=file.content_type,
        stream=file.file,
    )


@router.get("/{chat_id}/search", response_model=list[MessageView])
async def search_messages(
    chat_id: str,
    user: CurrentUser,
    query: SearchMessagesQueryDep,
    term: Annotated[str | None, Query(description="검색어 (대소문자 무시)")] = None,
    limit: Annotated[str | None, Query()] = None,
    skip: Annotated[str | None, Query()] = None,
) -> list[MessageView]:
    messages = await query.execute(
        parse_id(chat_id, "chatId"),
        user,
        term=term,
        limit=limit,
        skip=skip,
    )
    return [MessageView.from_entity(message) for message in messages]
