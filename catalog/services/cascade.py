"""
Catalog API: Product Cascade After Category Deletion
======================================================

What:  Removes every product that references a deleted category.
How:   The category delete commits first, then hands the category id to
       `CascadeDeleter.trigger()`:

       background (default)
           The cascade runs as a tracked asyncio task in its own session.
           The HTTP response does not wait for it. The task object is the
           completion channel: callers may await it, `drain()` awaits all
           of them, and failures are logged by the done-callback.
       inline
           The category delete awaits the cascade before responding, and a
           failure surfaces to the client as a DatabaseError.

Failure semantics (background):
    No retry. A failed cascade leaves orphaned products, which the product
    listings render with `category: null`.

Known race:
    A product created under the category after the cascade's DELETE ran
    escapes it. There is no cross-collection transaction.
"""

import asyncio
import logging
from typing import Optional, Set
from uuid import UUID

from fastapi import Request
from sqlalchemy import delete

from catalog.database import Database
from catalog.exceptions import DatabaseError
from catalog.models.product import Product

logger = logging.getLogger(__name__)


class CascadeDeleter:
    """
    Deletes the products of removed categories.

    One instance per application, stored on `app.state.cascade` and shared
    by every request. It holds references to in-flight tasks so they are not
    garbage-collected mid-run and can be drained at shutdown.
    """

    BACKGROUND = "background"
    INLINE = "inline"

    def __init__(self, database: Database, mode: str = BACKGROUND):
        self.database = database
        self.mode = mode
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of background cascades that have not finished yet."""
        return len(self._tasks)

    async def delete_products_for_category(self, category_id: UUID) -> int:
        """
        Delete all products whose category_id equals `category_id`.

        Runs in a dedicated session so it does not depend on the request
        session that removed the category.

        Returns:
            Number of products removed.

        Raises:
            DatabaseError: the DELETE or its commit failed.
        """
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    delete(Product).where(Product.category_id == category_id)
                )
                deleted = result.rowcount or 0
        except Exception as e:
            raise DatabaseError(
                message="Could not delete the products of the removed category.",
                context={"category_id": str(category_id), "error_type": type(e).__name__},
            ) from e

        logger.info("Products from %s were deleted (%d removed)", category_id, deleted)
        return deleted

    def schedule(self, category_id: UUID) -> "asyncio.Task[int]":
        """Start the cascade as a background task and return it."""
        task = asyncio.create_task(
            self.delete_products_for_category(category_id),
            name=f"cascade-delete:{category_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def trigger(self, category_id: UUID) -> Optional["asyncio.Task[int]"]:
        """
        Run the cascade according to the configured mode.

        Returns:
            The background task, or None when the cascade already ran inline.
        """
        if self.mode == self.INLINE:
            await self.delete_products_for_category(category_id)
            return None
        return self.schedule(category_id)

    def _on_done(self, task: "asyncio.Task[int]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Cascade %s was cancelled before completing", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            context = getattr(exc, "context", {})
            logger.error("Cascade %s failed: %s | Context: %s", task.get_name(), exc, context)

    async def drain(self) -> None:
        """Wait for every in-flight cascade; failures are already logged."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def get_cascade(request: Request) -> CascadeDeleter:
    """FastAPI dependency returning the application's CascadeDeleter."""
    return request.app.state.cascade
