"""
Catalog API: Cascade Delete Tests
===================================

What:  Tests for CascadeDeleter against a temporary SQLite database.

What we test:
    ✅ Only products of the given category are removed
    ✅ schedule() returns an awaitable task and tracks it until done
    ✅ A failing background cascade is logged, and drain() does not raise
    ✅ Inline mode finishes before trigger() returns
    ✅ Inline mode surfaces failures as DatabaseError
"""

import logging
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from catalog.exceptions import DatabaseError
from catalog.models import Category, Product
from catalog.services.cascade import CascadeDeleter


async def _seed(database):
    """Two categories: `doomed` with two products, `kept` with one."""
    async with database.session() as session:
        doomed = Category(name="Doomed")
        kept = Category(name="Kept")
        session.add_all([doomed, kept])
        await session.flush()
        session.add_all([
            Product(name="P1", price=1.0, category_id=doomed.id),
            Product(name="P2", price=2.0, category_id=doomed.id),
            Product(name="P3", price=3.0, category_id=kept.id),
        ])
    return doomed.id, kept.id


async def _count_products(database, category_id):
    async with database.session() as session:
        result = await session.execute(
            select(func.count(Product.id)).where(Product.category_id == category_id)
        )
        return result.scalar()


def _broken_database():
    database = MagicMock()
    database.session.side_effect = RuntimeError("database is gone")
    return database


class TestCascadeDeleter:

    @pytest.mark.asyncio
    async def test_deletes_only_matching_products(self, database):
        doomed_id, kept_id = await _seed(database)
        cascade = CascadeDeleter(database)

        deleted = await cascade.delete_products_for_category(doomed_id)

        assert deleted == 2
        assert await _count_products(database, doomed_id) == 0
        assert await _count_products(database, kept_id) == 1

    @pytest.mark.asyncio
    async def test_schedule_returns_trackable_task(self, database):
        doomed_id, _ = await _seed(database)
        cascade = CascadeDeleter(database)

        task = cascade.schedule(doomed_id)
        assert cascade.pending == 1

        assert await task == 2
        await cascade.drain()
        assert cascade.pending == 0

    @pytest.mark.asyncio
    async def test_background_failure_is_logged(self, caplog):
        cascade = CascadeDeleter(_broken_database())
        caplog.set_level(logging.ERROR, logger="catalog.services.cascade")

        task = cascade.schedule(MagicMock())
        await cascade.drain()

        assert isinstance(task.exception(), DatabaseError)
        assert cascade.pending == 0
        assert any("failed" in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_inline_mode_completes_before_returning(self, database):
        doomed_id, _ = await _seed(database)
        cascade = CascadeDeleter(database, mode=CascadeDeleter.INLINE)

        task = await cascade.trigger(doomed_id)

        assert task is None
        assert cascade.pending == 0
        assert await _count_products(database, doomed_id) == 0

    @pytest.mark.asyncio
    async def test_inline_mode_raises_on_failure(self):
        cascade = CascadeDeleter(_broken_database(), mode=CascadeDeleter.INLINE)

        with pytest.raises(DatabaseError):
            await cascade.trigger(MagicMock())
