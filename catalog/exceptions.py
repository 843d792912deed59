"""
Catalog API: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios the API knows.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) turn them into the JSON
       error envelope with the matching HTTP status code.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all Catalog API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for 400s)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input cannot be processed.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid request",
            "details": {"field": "price"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    When:  Deleting an unknown category or product, creating a product under
           a category name nobody registered, or a scoped product update
           whose category is missing.
    HTTP:  404 Not Found

    Services look records up as Optional[...] and raise this when the
    result is None, keeping HTTP concerns out of the store code.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    The client always gets a generic message; the driver error is only
    recorded in `context` and in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
