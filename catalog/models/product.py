"""
Catalog API: Product SQLAlchemy Model
=======================================

What:  ORM model for the `products` table.

Category reference:
    category_id holds the owning category's id but carries NO foreign-key
    constraint. The reference is checked once, when the product is created
    (the category is looked up by name), and never re-validated. Deleting a
    category removes its products through the cascade helper, not through
    the database.

    `Product.category` is a view-only relationship used to expand the bare
    id into the full category record ("populate"). It resolves to None for
    an orphaned product.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from catalog.database import Base
from catalog.models.category import Category


class Product(Base):
    """A sellable item belonging to exactly one category."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=None)

    category_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    category: Mapped[Optional[Category]] = relationship(
        Category,
        primaryjoin=lambda: foreign(Product.category_id) == Category.id,
        viewonly=True,
        lazy="raise",
    )

    # Every product listing filters on category_id
    __table_args__ = (
        Index("idx_products_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', category_id={self.category_id})>"
