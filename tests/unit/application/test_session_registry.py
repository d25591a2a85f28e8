"""Tests for SessionRegistry."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from niklaus.application.services import SessionRegistry


def _factory():
    controller = MagicMock()
    controller.close = AsyncMock()
    return controller


@pytest.mark.asyncio
async def test_create_and_get():
    registry = SessionRegistry(_factory)

    session_id, controller = await registry.create()

    assert session_id in registry
    assert registry.get(session_id) is controller
    assert registry.get("unknown") is None


@pytest.mark.asyncio
async def test_least_recently_used_evicted():
    registry = SessionRegistry(_factory, max_sessions=2)
    first_id, first = await registry.create()
    second_id, _ = await registry.create()

    registry.get(first_id)
    await registry.create()

    assert len(registry) == 2
    assert first_id in registry
    assert second_id not in registry


@pytest.mark.asyncio
async def test_eviction_closes_controller():
    registry = SessionRegistry(_factory, max_sessions=1)
    _, first = await registry.create()

    await registry.create()

    first.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_close():
    registry = SessionRegistry(_factory)
    session_id, controller = await registry.create()

    assert await registry.close(session_id) is True
    assert await registry.close(session_id) is False
    controller.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_all():
    registry = SessionRegistry(_factory)
    controllers = [(await registry.create())[1] for _ in range(3)]

    await registry.close_all()

    assert len(registry) == 0
    for controller in controllers:
        controller.close.assert_awaited_once()
