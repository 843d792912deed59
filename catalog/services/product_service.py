"""
Catalog API: Product Service
==============================

What:  Store operations for products.

Category handling:
    - Listings and get-by-id expand `category` into the full record
      (selectinload on the view-only Product.category relationship).
    - Create resolves the category by *name* and stores its id; an unknown
      name is a 404 and nothing is inserted.
    - The scoped update first checks the category exists (404 otherwise),
      then updates the product matching BOTH ids. A product that is not in
      that category is silently left alone and the update still succeeds.
      A `category` field moves the product; its target must exist (404).
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.exceptions import CatalogError, DatabaseError, NotFoundError
from catalog.models.product import Product
from catalog.schemas.common import MessageResponse
from catalog.schemas.product import ProductCreate, ProductDetailResponse, ProductResponse
from catalog.services.category_service import category_service

logger = logging.getLogger(__name__)

PRODUCT_UPDATED_MESSAGE = "Updated successfully."


class ProductService:
    """Stateless product operations; the session is passed on every call."""

    def _expanded(self):
        return (
            select(Product)
            .options(selectinload(Product.category))
            .order_by(Product.created_at)
        )

    async def _fetch_expanded(self, db: AsyncSession, query) -> List[ProductDetailResponse]:
        try:
            result = await db.execute(query)
            products = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [ProductDetailResponse.from_product(product) for product in products]

    async def list_products_in_category(
        self, db: AsyncSession, category_id: UUID
    ) -> List[ProductDetailResponse]:
        """Products whose category equals `category_id`, category expanded."""
        return await self._fetch_expanded(
            db, self._expanded().where(Product.category_id == category_id)
        )

    async def list_products(self, db: AsyncSession) -> List[ProductDetailResponse]:
        """Every product across all categories, category expanded."""
        return await self._fetch_expanded(db, self._expanded())

    async def get_product(self, db: AsyncSession, product_id: UUID) -> List[ProductDetailResponse]:
        """
        Look a product up by id.

        Returns a list of zero or one products. An unknown id is an empty
        list, not an error.
        """
        return await self._fetch_expanded(db, self._expanded().where(Product.id == product_id))

    async def create_product(self, db: AsyncSession, data: ProductCreate) -> ProductResponse:
        """
        Create a product under the category named `data.category`.

        Raises:
            NotFoundError: no category has that name (→ 404, nothing created)
            DatabaseError: the insert failed (→ 500)
        """
        try:
            category = await category_service.find_category_by_name(db, data.category)
            if category is None:
                raise NotFoundError(resource="category", context={"name": data.category})

            product = Product(
                name=data.name,
                description=data.description,
                price=data.price,
                category_id=category.id,
            )
            db.add(product)
            await db.flush()
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the product. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product created: %s in category %s", product.id, category.id)
        return ProductResponse.from_product(product)

    async def update_product_in_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        product_id: UUID,
        fields: Dict[str, Any],
    ) -> MessageResponse:
        """
        Merge `fields` into the product matching both ids.

        Raises:
            NotFoundError: the category, or the `category` it is being moved
                to, does not exist (→ 404, no update)
            DatabaseError: the update failed (→ 500)
        """
        try:
            category = await category_service.find_category(db, category_id)
            if category is None:
                raise NotFoundError(resource="category", resource_id=str(category_id))

            fields = dict(fields)
            if "category" in fields:
                target_id = fields.pop("category")
                if target_id != category_id:
                    target = await category_service.find_category(db, target_id)
                    if target is None:
                        raise NotFoundError(resource="category", resource_id=str(target_id))
                fields["category_id"] = target_id

            if fields:
                result = await db.execute(
                    update(Product)
                    .where(Product.id == product_id, Product.category_id == category_id)
                    .values(**fields)
                )
                if not result.rowcount:
                    logger.debug(
                        "Update matched no product %s in category %s", product_id, category_id
                    )
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not update the product. Please try again.",
                context={"product_id": str(product_id), "category_id": str(category_id)},
            )

        return MessageResponse(message=PRODUCT_UPDATED_MESSAGE)

    async def delete_product(self, db: AsyncSession, product_id: UUID) -> ProductResponse:
        """
        Remove a product and return the removed record.

        Raises:
            NotFoundError: no product has this id (→ 404)
            DatabaseError: the delete failed (→ 500)
        """
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
            if product is None:
                raise NotFoundError(resource="product", resource_id=str(product_id))

            removed = ProductResponse.from_product(product)
            await db.delete(product)
            await db.flush()
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not delete the product. Please try again.",
                context={"product_id": str(product_id)},
            )

        logger.info("Product %s deleted", product_id)
        return removed


product_service = ProductService()
