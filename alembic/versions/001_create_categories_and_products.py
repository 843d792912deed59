"""Create categories and products tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

products.category_id intentionally has no foreign-key constraint: the
application establishes the reference when a product is created and removes
products itself when their category is deleted.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_categories_name", "categories", ["name"])

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_products_category_id", "products", ["category_id"])


def downgrade() -> None:
    """Drops both tables; all catalog data is lost."""
    op.drop_index("idx_products_category_id", table_name="products")
    op.drop_table("products")
    op.drop_index("idx_categories_name", table_name="categories")
    op.drop_table("categories")
