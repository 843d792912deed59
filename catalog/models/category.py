"""
Catalog API: Category SQLAlchemy Model
========================================

What:  ORM model for the `categories` table.
Who:   Used by CategoryService for CRUD and by ProductService for lookups.

Table Design:
    - UUID primary key assigned by the application on insert
    - name is NOT unique; two categories may share a label, and lookups by
      name take the oldest match
    - created_at only defines the natural listing order; it is not exposed
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Category(Base):
    """
    A named grouping that products reference.

    Lifecycle:
        1. Created via POST /category/create
        2. Partially updated via PATCH /category/{id}
        3. Deleted via DELETE /category/{id}, which schedules the removal
           of every product whose category_id points here
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_categories_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
