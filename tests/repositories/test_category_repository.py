# tests/repositories/test_category_repository.py
"""Tests for app/repositories/category.py module."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.repositories import CategoryRepository


@pytest.mark.asyncio
async def test_get_titles_empty_skips_query(session: MagicMock) -> None:
    assert await CategoryRepository(session).get_titles(set()) == {}
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_titles_maps_rows(session: MagicMock, result: MagicMock) -> None:
    category_id = uuid4()
    row = MagicMock(id=category_id, title="Travel")
    result.all.return_value = [row]

    titles = await CategoryRepository(session).get_titles({category_id})

    assert titles == {category_id: "Travel"}
    session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_exists(session: MagicMock, result: MagicMock) -> None:
    result.scalar_one_or_none.return_value = 1
    assert await CategoryRepository(session).exists(uuid4()) is True
