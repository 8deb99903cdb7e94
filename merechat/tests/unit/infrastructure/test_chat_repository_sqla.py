"""ChatRepositorySQLA Unit Tests (DB 없이 검증 가능한 부분).

statement는 실제 DB 대신 asyncpg 방언으로 컴파일해 SQL 형태를 확인한다.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects.postgresql import asyncpg
from sqlalchemy.exc import OperationalError

from merechat.application.common.exceptions.infrastructure import StoreError
from merechat.domain.entities.chat import Chat
from merechat.infrastructure.persistence_postgres.adapters.chat_repository_sqla import (
    ChatRepositorySQLA,
    escape_like,
)
from merechat.infrastructure.persistence_postgres.mappings import start_mappers


class TestEscapeLike:
    """LIKE 패턴 이스케이프 테스트."""

    def test_plain_term_unchanged(self) -> None:
        assert escape_like("hello") == "hello"

    def test_wildcards_escaped(self) -> None:
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escape_char_escaped(self) -> None:
        assert escape_like("a\\b") == "a\\\\b"


class TestStoreErrorWrapping:
    """SQLAlchemyError → StoreError 변환 테스트."""

    @pytest.mark.asyncio
    async def test_sqlalchemy_error_becomes_store_error(self) -> None:
        session_factory = MagicMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
        )
        repository = ChatRepositorySQLA(session_factory)

        with pytest.raises(StoreError) as exc_info:
            await repository.get_participants(uuid4())

        assert exc_info.value.operation == "get_participants"


class RecordingSession:
    """실행된 statement를 기록하는 AsyncSession 대역."""

    def __init__(self, result: MagicMock) -> None:
        self.statements: list = []
        self._result = result

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False

    def begin(self) -> "RecordingSession":
        return self

    async def execute(self, statement):
        self.statements.append(statement)
        return self._result


def compile_pg(statement):
    return statement.compile(dialect=asyncpg.dialect())


@pytest.fixture(scope="module", autouse=True)
def mappers() -> None:
    start_mappers()


@pytest.fixture
def result() -> MagicMock:
    result = MagicMock()
    result.rowcount = 1
    result.all.return_value = []
    result.scalars.return_value.all.return_value = []
    return result


@pytest.fixture
def session(result) -> RecordingSession:
    return RecordingSession(result)


@pytest.fixture
def repository(session) -> ChatRepositorySQLA:
    return ChatRepositorySQLA(MagicMock(return_value=session))


class TestStatementShape:
    """PostgreSQL 방언으로 컴파일한 SQL 형태 검증."""

    @pytest.mark.asyncio
    async def test_get_or_create_inserts_on_conflict_do_nothing(
        self, repository, session
    ) -> None:
        chat = Chat(participants=["bob", "alice"])

        await repository.get_or_create_chat(chat)

        insert_stmt, select_stmt = session.statements
        insert_sql = str(compile_pg(insert_stmt))
        assert insert_sql.startswith("INSERT INTO merechat.chats")
        assert "ON CONFLICT (participant_key) DO NOTHING" in insert_sql

        select_compiled = compile_pg(select_stmt)
        assert "WHERE merechat.chats.participant_key =" in str(select_compiled)
        assert chat.participant_key in select_compiled.params.values()

    @pytest.mark.asyncio
    async def test_add_reader_appends_only_when_absent(self, repository, session) -> None:
        message_id = uuid4()

        assert await repository.add_reader(message_id, "bob") is True

        (stmt,) = session.statements
        compiled = compile_pg(stmt)
        sql = str(compiled)
        assert sql.startswith("UPDATE merechat.messages SET read_by=CASE WHEN")
        assert "merechat.messages.read_by @>" in sql
        assert "THEN merechat.messages.read_by ELSE array_append(merechat.messages.read_by" in sql
        assert "WHERE merechat.messages.id =" in sql
        assert ["bob"] in compiled.params.values()
        assert "bob" in compiled.params.values()
        assert message_id in compiled.params.values()

    @pytest.mark.asyncio
    async def test_add_reader_unknown_message(self, repository, result) -> None:
        result.rowcount = 0

        assert await repository.add_reader(uuid4(), "bob") is False

    @pytest.mark.asyncio
    async def test_count_unread_excludes_read_by_identity(self, repository, session) -> None:
        chat_ids = [uuid4(), uuid4()]

        assert await repository.count_unread_by_chat("bob", chat_ids) == {}

        (stmt,) = session.statements
        compiled = compile_pg(stmt)
        sql = str(compiled)
        assert "count(merechat.messages.id)" in sql
        assert "NOT (merechat.messages.read_by @>" in sql
        assert "GROUP BY merechat.messages.chat_id" in sql
        assert ["bob"] in compiled.params.values()

    @pytest.mark.asyncio
    async def test_count_unread_without_chats_skips_query(self, repository, session) -> None:
        assert await repository.count_unread_by_chat("bob", []) == {}

        assert session.statements == []

    @pytest.mark.asyncio
    async def test_search_uses_escaped_ilike(self, repository, session) -> None:
        await repository.get_messages_by_chat(uuid4(), limit=10, skip=20, term="50%")

        (stmt,) = session.statements
        compiled = compile_pg(stmt)
        sql = str(compiled)
        assert "merechat.messages.content ILIKE" in sql
        assert "ESCAPE" in sql
        assert "ORDER BY merechat.messages.created_at ASC, merechat.messages.id ASC" in sql
        assert "%50\\%%" in compiled.params.values()

    @pytest.mark.asyncio
    async def test_listing_without_term_has_no_filter(self, repository, session) -> None:
        await repository.get_messages_by_chat(uuid4(), limit=10, skip=0)

        (stmt,) = session.statements
        assert "ILIKE" not in str(compile_pg(stmt))
