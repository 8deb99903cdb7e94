"""HTTP Controller 단위 테스트."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from merechat.application.chat.dto import AttachmentView, UnreadCountView
from merechat.application.common.exceptions.infrastructure import StoreError
from merechat.application.common.exceptions.validation import (
    MessageRequiredError,
    ParticipantsMustIncludeSelfError,
)
from merechat.domain.entities.chat import Chat
from merechat.domain.entities.message import Message
from merechat.domain.exceptions.chat import ChatNotFoundError
from merechat.domain.exceptions.message import MessageNotFoundError
from merechat.main import create_app
from merechat.setup.dependencies import (
    get_chat_query,
    get_edit_message_command,
    get_list_chats_query,
    get_mark_read_command,
    get_messages_query,
    get_search_messages_query,
    get_send_message_command,
    get_start_chat_command,
    get_unread_counts_query,
    get_upload_attachment_command,
)

ALICE = {"X-User-ID": "alice"}

app = create_app()


@pytest.fixture
def client() -> TestClient:
    """TestClient 인스턴스."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_use_case() -> AsyncMock:
    use_case = AsyncMock()
    use_case.execute = AsyncMock()
    return use_case


@pytest.fixture
def sample_chat() -> Chat:
    return Chat(participants=["alice", "bob"])


@pytest.fixture
def sample_message(sample_chat: Chat) -> Message:
    return Message(
        chat_id=sample_chat.id,
        sender="alice",
        content="hello",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


class TestHealthController:
    """Health/Ready 엔드포인트 테스트."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "merechat-api"

    def test_metrics(self, client: TestClient) -> None:
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "merechat_ws_connections_active" in response.text


class TestChatController:
    """Chat 엔드포인트 테스트."""

    def test_missing_identity_is_401(self, client: TestClient) -> None:
        response = client.get("/api/v1/chats")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_list_chats(self, client, mock_use_case, sample_chat) -> None:
        mock_use_case.execute.return_value = [sample_chat]
        app.dependency_overrides[get_list_chats_query] = lambda: mock_use_case

        response = client.get("/api/v1/chats", headers=ALICE)

        assert response.status_code == 200
        body = response.json()
        assert body[0]["id"] == str(sample_chat.id)
        assert body[0]["participants"] == ["alice", "bob"]
        assert "createdAt" in body[0]
        assert "updatedAt" in body[0]
        mock_use_case.execute.assert_awaited_once_with("alice")

    def test_list_chats_store_error_is_500(self, client, mock_use_case) -> None:
        mock_use_case.execute.side_effect = StoreError("list_chats_by_participant")
        app.dependency_overrides[get_list_chats_query] = lambda: mock_use_case

        response = client.get("/api/v1/chats", headers=ALICE)

        assert response.status_code == 500
        assert response.json()["code"] == "STORE_ERROR"

    def test_start_chat(self, client, mock_use_case, sample_chat) -> None:
        mock_use_case.execute.return_value = sample_chat
        app.dependency_overrides[get_start_chat_command] = lambda: mock_use_case

        response = client.post(
            "/api/v1/chats", json={"participants": ["alice", "bob"]}, headers=ALICE
        )

        assert response.status_code == 200
        assert response.json()["id"] == str(sample_chat.id)
        mock_use_case.execute.assert_awaited_once_with("alice", ["alice", "bob"])

    def test_start_chat_without_self_is_400(self, client, mock_use_case) -> None:
        mock_use_case.execute.side_effect = ParticipantsMustIncludeSelfError()
        app.dependency_overrides[get_start_chat_command] = lambda: mock_use_case

        response = client.post("/api/v1/chats", json={"participants": ["bob", "carol"]}, headers=ALICE)

        assert response.status_code == 400
        assert response.json()["detail"] == "must include yourself"

    def test_start_chat_bad_body_is_400(self, client, mock_use_case) -> None:
        app.dependency_overrides[get_start_chat_command] = lambda: mock_use_case

        response = client.post("/api/v1/chats", json={"participants": "alice"}, headers=ALICE)

        assert response.status_code == 400
        mock_use_case.execute.assert_not_called()

    def test_get_chat_bad_id_is_400(self, client, mock_use_case) -> None:
        app.dependency_overrides[get_chat_query] = lambda: mock_use_case

        response = client.get("/api/v1/chats/not-a-uuid", headers=ALICE)

        assert response.status_code == 400
        mock_use_case.execute.assert_not_called()

    def test_get_chat_not_found_is_404(self, client, mock_use_case) -> None:
        mock_use_case.execute.side_effect = ChatNotFoundError()
        app.dependency_overrides[get_chat_query] = lambda: mock_use_case

        response = client.get(f"/api/v1/chats/{uuid4()}", headers=ALICE)

        assert response.status_code == 404
        assert response.json()["code"] == "CHAT_NOT_FOUND"

    def test_get_messages_passes_raw_pagination(
        self, client, mock_use_case, sample_chat, sample_message
    ) -> None:
        mock_use_case.execute.return_value = [sample_message]
        app.dependency_overrides[get_messages_query] = lambda: mock_use_case

        response = client.get(
            f"/api/v1/chats/{sample_chat.id}/messages?limit=abc&skip=2", headers=ALICE
        )

        assert response.status_code == 200
        body = response.json()
        assert body[0]["chatId"] == str(sample_chat.id)
        assert body[0]["readBy"] == []
        assert body[0]["editedAt"] is None
        mock_use_case.execute.assert_awaited_once_with(
            sample_chat.id, "alice", limit="abc", skip="2"
        )

    def test_send_message(self, client, mock_use_case, sample_chat, sample_message) -> None:
        mock_use_case.execute.return_value = sample_message
        app.dependency_overrides[get_send_message_command] = lambda: mock_use_case

        response = client.post(
            f"/api/v1/chats/{sample_chat.id}/message", json={"content": "hello"}, headers=ALICE
        )

        assert response.status_code == 200
        assert response.json()["id"] == str(sample_message.id)
        mock_use_case.execute.assert_awaited_once_with(sample_chat.id, "alice", "hello")

    def test_send_empty_message_is_400(self, client, mock_use_case, sample_chat) -> None:
        mock_use_case.execute.side_effect = MessageRequiredError()
        app.dependency_overrides[get_send_message_command] = lambda: mock_use_case

        response = client.post(
            f"/api/v1/chats/{sample_chat.id}/message", json={"content": ""}, headers=ALICE
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "content is required"

    def test_upload(self, client, mock_use_case, sample_chat) -> None:
        mock_use_case.execute.return_value = AttachmentView(
            id="a1", url="/static/x.png", type="image/png"
        )
        app.dependency_overrides[get_upload_attachment_command] = lambda: mock_use_case

        response = client.post(
            f"/api/v1/chats/{sample_chat.id}/upload",
            files={"file": ("x.png", b"\x89PNG", "image/png")},
            headers=ALICE,
        )

        assert response.status_code == 200
        assert response.json() == {"id": "a1", "url": "/static/x.png", "type": "image/png"}
        kwargs = mock_use_case.execute.call_args.kwargs
        assert kwargs["filename"] == "x.png"
        assert kwargs["content_type"] == "image/png"

    def test_upload_without_file_is_400(self, client, mock_use_case, sample_chat) -> None:
        app.dependency_overrides[get_upload_attachment_command] = lambda: mock_use_case

        response = client.post(f"/api/v1/chats/{sample_chat.id}/upload", headers=ALICE)

        assert response.status_code == 400
        mock_use_case.execute.assert_not_called()

    def test_search(self, client, mock_use_case, sample_chat) -> None:
        mock_use_case.execute.return_value = []
        app.dependency_overrides[get_search_messages_query] = lambda: mock_use_case

        response = client.get(f"/api/v1/chats/{sample_chat.id}/search?term=he", headers=ALICE)

        assert response.status_code == 200
        assert response.json() == []
        mock_use_case.execute.assert_awaited_once_with(
            sample_chat.id, "alice", term="he", limit=None, skip=None
        )


class TestMessagesController:
    """Message 엔드포인트 테스트."""

    def test_edit_returns_204(self, client, mock_use_case) -> None:
        app.dependency_overrides[get_edit_message_command] = lambda: mock_use_case
        message_id = uuid4()

        response = client.patch(
            f"/api/v1/messages/{message_id}", json={"content": "new"}, headers=ALICE
        )

        assert response.status_code == 204
        mock_use_case.execute.assert_awaited_once_with(message_id, "alice", "new")

    def test_edit_other_sender_is_404(self, client, mock_use_case) -> None:
        mock_use_case.execute.side_effect = MessageNotFoundError()
        app.dependency_overrides[get_edit_message_command] = lambda: mock_use_case

        response = client.patch(f"/api/v1/messages/{uuid4()}", json={"content": "x"}, headers=ALICE)

        assert response.status_code == 404
        assert response.json()["detail"] == "not found or no permission"

    def test_mark_read_returns_204(self, client, mock_use_case) -> None:
        app.dependency_overrides[get_mark_read_command] = lambda: mock_use_case

        response = client.post(f"/api/v1/messages/{uuid4()}/read", headers=ALICE)

        assert response.status_code == 204

    def test_mark_read_bad_id_is_400(self, client, mock_use_case) -> None:
        app.dependency_overrides[get_mark_read_command] = lambda: mock_use_case

        response = client.post("/api/v1/messages/xyz/read", headers=ALICE)

        assert response.status_code == 400

    def test_unread_count(self, client, mock_use_case) -> None:
        chat_id = str(uuid4())
        mock_use_case.execute.return_value = [UnreadCountView(chat_id=chat_id, count=3)]
        app.dependency_overrides[get_unread_counts_query] = lambda: mock_use_case

        response = client.get("/api/v1/messages/unread-count", headers=ALICE)

        assert response.status_code == 200
        assert response.json() == [{"chatId": chat_id, "count": 3}]
