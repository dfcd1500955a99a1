# tests/db/test_database.py
"""Tests for app/db/database.py module."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.db import database


@pytest.fixture
def session() -> MagicMock:
    mock = MagicMock()
    mock.commit = AsyncMock()
    mock.rollback = AsyncMock()
    return mock


@pytest.fixture
def session_maker(session: MagicMock) -> MagicMock:
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


@pytest.mark.asyncio
async def test_transaction_commits(session: MagicMock, session_maker: MagicMock) -> None:
    with patch.object(database, "async_session_maker", session_maker):
        async with database.transaction() as yielded:
            assert yielded is session

    session.commit.assert_awaited_once()
    session.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_transaction_rolls_back(session: MagicMock, session_maker: MagicMock) -> None:
    with patch.object(database, "async_session_maker", session_maker):
        with pytest.raises(RuntimeError):
            async with database.transaction():
                raise RuntimeError("boom")

    session.rollback.assert_awaited_once()
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_session_yields_transaction_session(
    session: MagicMock,
    session_maker: MagicMock,
) -> None:
    with patch.object(database, "async_session_maker", session_maker):
        generator = database.get_session()
        assert await anext(generator) is session
        with pytest.raises(StopAsyncIteration):
            await anext(generator)

    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_ping_db_failure_is_false() -> None:
    engine = MagicMock()
    engine.connect.side_effect = OSError("connection refused")

    with patch.object(database, "engine", engine):
        assert await database.ping_db() is False
