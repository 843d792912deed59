"""
Catalog API: Category Service
===============================

What:  Store operations for categories.
Who:   Called by the category route handlers; ProductService uses the
       lookup helpers to resolve and check category references.

Operation summary:
    list_categories()          every category, natural (creation) order
    create_category()          insert, return record with assigned id
    update_category()          merge supplied fields; unknown id is a no-op
    delete_category()          remove + return record, then cascade products
    find_category()            Optional lookup by id
    find_category_by_name()    Optional lookup by name (oldest match wins)

Error Handling Strategy:
    Lookups return Optional[Category]; public operations turn None into
    NotFoundError where the API calls for a 404. Any other failure is
    wrapped in DatabaseError so the client gets a generic 500.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import CatalogError, DatabaseError, NotFoundError
from catalog.models.category import Category
from catalog.schemas.category import CategoryCreate, CategoryResponse
from catalog.schemas.common import MessageResponse
from catalog.services.cascade import CascadeDeleter

logger = logging.getLogger(__name__)

CATEGORY_UPDATED_MESSAGE = "updated successfully"


class CategoryService:
    """Stateless; receives the session (and cascade helper) on every call."""

    # ── Lookups ───────────────────────────────────────────────────────────

    async def find_category(self, db: AsyncSession, category_id: UUID) -> Optional[Category]:
        result = await db.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def find_category_by_name(self, db: AsyncSession, name: str) -> Optional[Category]:
        result = await db.execute(
            select(Category)
            .where(Category.name == name)
            .order_by(Category.created_at)
            .limit(1)
        )
        return result.scalars().first()

    # ── Operations ────────────────────────────────────────────────────────

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """Return every category, unfiltered and unpaginated."""
        try:
            result = await db.execute(select(Category).order_by(Category.created_at))
            categories = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [CategoryResponse.model_validate(category) for category in categories]

    async def create_category(self, db: AsyncSession, data: CategoryCreate) -> CategoryResponse:
        """Insert a category; names are not checked for uniqueness."""
        try:
            category = Category(name=data.name, description=data.description)
            db.add(category)
            await db.flush()  # Assigns defaults without committing
        except Exception as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the category. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Category created: %s (%s)", category.id, category.name)
        return CategoryResponse.model_validate(category)

    async def update_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        fields: Dict[str, Any],
    ) -> MessageResponse:
        """
        Merge `fields` into the category with `category_id`.

        Only the supplied keys change. When no category matches, nothing is
        written and the acknowledgment is still returned.
        """
        if fields:
            try:
                result = await db.execute(
                    update(Category).where(Category.id == category_id).values(**fields)
                )
            except Exception as e:
                logger.error("Database error updating category %s: %s", category_id, str(e))
                raise DatabaseError(
                    message="Could not update the category. Please try again.",
                    context={"category_id": str(category_id)},
                )
            if not result.rowcount:
                logger.debug("Update matched no category for id %s", category_id)

        return MessageResponse(message=CATEGORY_UPDATED_MESSAGE)

    async def delete_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        cascade: CascadeDeleter,
    ) -> CategoryResponse:
        """
        Remove a category and hand its id to the product cascade.

        The removal is committed before the cascade starts. In background
        mode the returned record reaches the client before its products
        are gone.

        Raises:
            NotFoundError: no category has this id (→ 404)
            DatabaseError: the delete failed (→ 500)
        """
        try:
            category = await self.find_category(db, category_id)
            if category is None:
                raise NotFoundError(resource="category", resource_id=str(category_id))

            removed = CategoryResponse.model_validate(category)
            await db.delete(category)
            await db.commit()
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Database error deleting category %s: %s", category_id, str(e))
            raise DatabaseError(
                message="Could not delete the category. Please try again.",
                context={"category_id": str(category_id)},
            )

        logger.info("Category %s deleted; cascading to its products", category_id)
        await cascade.trigger(removed.id)
        return removed


category_service = CategoryService()
