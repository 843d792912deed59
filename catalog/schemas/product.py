"""
Catalog API: Product Schemas
==============================

What:  Request bodies and response models for product endpoints.

Two response shapes:
    ProductResponse        `category` is the bare category id
                           (create and delete return this)
    ProductDetailResponse  `category` is the expanded category record,
                           or null when the product is orphaned
                           (every listing and the get-by-id return this)
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from catalog.models.product import Product
from catalog.schemas.category import CategoryResponse


class ProductCreate(BaseModel):
    """
    Body of POST /category/product/create.

    `category` is the category's *name*; the service resolves it to an id.
    """
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    category: str = Field(description="Name of an existing category")


class ProductUpdate(BaseModel):
    """
    Body of PATCH /category/{categoryId}/products/{productId} (partial).

    `category` is the id of the category to move the product to; it must
    name an existing category.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[uuid.UUID] = Field(default=None, description="Id of the new category")

    @field_validator("name", "category")
    @classmethod
    def reject_null(cls, v, info):
        """These fields may be omitted but not cleared."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ProductResponse(BaseModel):
    """A stored product with its category as a bare id."""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    category: uuid.UUID = Field(description="Id of the owning category")

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category_id,
        )


class ProductDetailResponse(BaseModel):
    """A stored product with its category expanded."""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[CategoryResponse] = Field(
        default=None,
        description="The owning category, or null if it no longer exists",
    )

    @classmethod
    def from_product(cls, product: Product) -> "ProductDetailResponse":
        """Requires `product.category` to be eager-loaded (selectinload)."""
        category = product.category
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=CategoryResponse.model_validate(category) if category is not None else None,
        )
