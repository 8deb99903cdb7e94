"""ConnectionRegistry Unit Tests."""

import asyncio

import pytest

from merechat.application.realtime.registry import ConnectionRegistry
from merechat.tests.fakes import FakeConnection


class TestConnectionRegistry:
    """ConnectionRegistry 테스트."""

    @pytest.mark.asyncio
    async def test_register_and_lookup(self) -> None:
        registry = ConnectionRegistry()
        conn = FakeConnection()

        await registry.register("alice", conn)

        assert registry.lookup("alice") is conn
        assert registry.lookup("bob") is None
        assert "alice" in registry
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_last_writer_wins(self) -> None:
        registry = ConnectionRegistry()
        first, second = FakeConnection(), FakeConnection()

        await registry.register("alice", first)
        await registry.register("alice", second)

        assert registry.lookup("alice") is second
        assert first.closed is False

    @pytest.mark.asyncio
    async def test_unregister_absent_is_noop(self) -> None:
        registry = ConnectionRegistry()

        assert await registry.unregister("ghost") is False

    @pytest.mark.asyncio
    async def test_unregister_stale_connection_keeps_newer_entry(self) -> None:
        registry = ConnectionRegistry()
        stale, fresh = FakeConnection(), FakeConnection()
        await registry.register("alice", stale)
        await registry.register("alice", fresh)

        removed = await registry.unregister("alice", stale)

        assert removed is False
        assert registry.lookup("alice") is fresh

    @pytest.mark.asyncio
    async def test_lookup_all_is_snapshot(self) -> None:
        registry = ConnectionRegistry()
        await registry.register("alice", FakeConnection())

        snapshot = registry.lookup_all()
        await registry.register("bob", FakeConnection())

        assert set(snapshot) == {"alice"}
        assert set(registry.lookup_all()) == {"alice", "bob"}

    @pytest.mark.asyncio
    async def test_concurrent_registers(self) -> None:
        registry = ConnectionRegistry()

        await asyncio.gather(
            *(registry.register(f"user-{i}", FakeConnection()) for i in range(50))
        )

        assert len(registry) == 50

    @pytest.mark.asyncio
    async def test_close_all_drains(self) -> None:
        registry = ConnectionRegistry()
        conns = [FakeConnection() for _ in range(3)]
        for i, conn in enumerate(conns):
            await registry.register(f"user-{i}", conn)

        closed = await registry.close_all()

        assert closed == 3
        assert len(registry) == 0
        assert all(conn.closed and conn.close_code == 1001 for conn in conns)
