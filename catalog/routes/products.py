"""
Catalog API: Product Route Handlers
=====================================

What:  HTTP surface for the product store.

    GET     /category/{categoryId}/products              products in a category
    GET     /products                                    all products
    GET     /products/{id}                               [] or [product]
    POST    /category/product/create                     create under a category name
    PATCH   /category/{categoryId}/products/{productId}  scoped partial update
    DELETE  /products/{productId}                        delete a product

Listings return the category expanded; create and delete return the
category as a bare id.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database import get_db_session
from catalog.schemas.common import ErrorResponse, MessageResponse
from catalog.schemas.product import (
    ProductCreate,
    ProductDetailResponse,
    ProductResponse,
    ProductUpdate,
)
from catalog.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


@router.get(
    "/category/{category_id}/products",
    response_model=List[ProductDetailResponse],
    summary="List the products of one category",
)
async def list_products_in_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductDetailResponse]:
    return await product_service.list_products_in_category(db, category_id)


@router.get(
    "/products",
    response_model=List[ProductDetailResponse],
    summary="List every product",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductDetailResponse]:
    return await product_service.list_products(db)


@router.get(
    "/products/{product_id}",
    response_model=List[ProductDetailResponse],
    summary="Get a product by id",
    description="Returns a list with the product, or an empty list if the id is unknown.",
)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductDetailResponse]:
    return await product_service.get_product(db, product_id)


@router.post(
    "/category/product/create",
    response_model=ProductResponse,
    responses={404: {"description": "No category has that name", "model": ErrorResponse}},
    summary="Create a product in a category",
    description="`category` in the body is the category *name*.",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create_product(db, payload)


@router.patch(
    "/category/{category_id}/products/{product_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Update a product within its category",
    description=(
        "Responds 404 when the category does not exist. Otherwise updates the "
        "product only if it belongs to the category, and acknowledges either way."
    ),
)
async def update_product(
    category_id: UUID,
    product_id: UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await product_service.update_product_in_category(
        db, category_id, product_id, payload.model_dump(exclude_unset=True)
    )


@router.delete(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.delete_product(db, product_id)
