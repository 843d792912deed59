"""
Catalog API: Application Package Initializer
==============================================

What: Marks the `catalog` directory as a Python package.
Who:  Imported by uvicorn (`catalog.main:app`), Alembic, and pytest.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Store Operations)     │  ← lookups, not-found, cascade
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database object on app.state
    └─────────────────────────────────────┘

    Every route maps one HTTP verb + path onto one store call. The only
    work that outlives a request is the product cascade after a category
    is deleted (see catalog.services.cascade).
"""

__version__ = "1.0.0"
