"""
Catalog API: Pydantic Request/Response Schemas
================================================

Schemas are kept separate from the SQLAlchemy models so the API contract
(for example the expanded `category` on product listings) can differ from
the table layout.
"""
