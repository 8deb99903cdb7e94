"""WebSocket Controller 테스트."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from merechat.main import create_app
from merechat.setup.dependencies import Container
from merechat.tests.fakes import InMemoryChatRepository


class NullStorage:
    async def save(self, stored_name, stream) -> str:
        return f"/static/{stored_name}"


@pytest.fixture
def container(settings, repository) -> Container:
    return Container(settings=settings, repository=repository, storage=NullStorage())


@pytest.fixture
def client(settings, container) -> TestClient:
    app = create_app(settings)
    app.state.container = container
    return TestClient(app)


class TestChatWebSocket:
    """/ws/chat 테스트."""

    def test_missing_identity_closes_with_policy_violation(self, client: TestClient) -> None:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/chat"):
                pass

        assert exc_info.value.code == 1008

    def test_message_roundtrip(
        self,
        client: TestClient,
        container: Container,
        repository: InMemoryChatRepository,
        chat,
    ) -> None:
        with client.websocket_connect("/ws/chat", headers={"X-User-ID": "alice"}) as ws:
            ws.send_json({"type": "message", "chatId": str(chat.id), "content": "hello"})
            event = ws.receive_json()

        assert event["type"] == "message"
        assert event["chatId"] == str(chat.id)
        assert event["message"]["sender"] == "alice"
        assert event["message"]["content"] == "hello"
        assert len(repository.messages) == 1

    def test_ready_reports_connections(self, client: TestClient) -> None:
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
