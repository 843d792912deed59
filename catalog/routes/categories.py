"""
Catalog API: Category Route Handlers
======================================

What:  HTTP surface for the category store.

    GET     /category           list categories
    POST    /category/create    create a category
    PATCH   /category/{id}      partial update (acknowledgment only)
    DELETE  /category/{id}      delete, then cascade to its products

Routes stay thin: they extract path and body values, call
CategoryService, and let the global handlers format errors.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database import get_db_session
from catalog.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from catalog.schemas.common import ErrorResponse, MessageResponse
from catalog.services.cascade import CascadeDeleter, get_cascade
from catalog.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Categories"])


@router.get(
    "/category",
    response_model=List[CategoryResponse],
    summary="List all categories",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await category_service.list_categories(db)


@router.post(
    "/category/create",
    response_model=CategoryResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Create a category",
    description="Creates a category and returns it, including the assigned id.",
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.create_category(db, payload)


@router.patch(
    "/category/{category_id}",
    response_model=MessageResponse,
    summary="Update a category",
    description=(
        "Merges the supplied fields into the category. Fields that are not "
        "sent keep their value. An unknown id is acknowledged without change."
    ),
)
async def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await category_service.update_category(
        db, category_id, payload.model_dump(exclude_unset=True)
    )


@router.delete(
    "/category/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a category and its products",
    description=(
        "Removes the category and returns it. Products referencing the "
        "category are removed afterwards; the response does not wait for "
        "that unless CASCADE_MODE=inline."
    ),
)
async def delete_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    cascade: CascadeDeleter = Depends(get_cascade),
) -> CategoryResponse:
    return await category_service.delete_category(db, category_id, cascade)
