"""
Catalog API: Category Schemas
===============================

What:  Request bodies and response model for category endpoints.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CategoryCreate(BaseModel):
    """Body of POST /category/create."""
    name: str = Field(description="Category label (not required to be unique)")
    description: Optional[str] = Field(default=None, description="Free-text description")


class CategoryUpdate(BaseModel):
    """
    Body of PATCH /category/{id}.

    Only the fields present in the request are merged into the stored record;
    routes read them with `model_dump(exclude_unset=True)`.
    """
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v: Optional[str]) -> str:
        """`name` may be omitted but not cleared."""
        if v is None:
            raise ValueError("name cannot be null")
        return v


class CategoryResponse(BaseModel):
    """A stored category record."""
    id: uuid.UUID = Field(description="Store-assigned identifier")
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
