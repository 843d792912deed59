"""
Catalog API: ORM Models
=========================

Importing this package registers every table on `Base.metadata`
(used by Alembic and by `Database.create_tables()`).
"""

from catalog.models.category import Category
from catalog.models.product import Product

__all__ = ["Category", "Product"]
