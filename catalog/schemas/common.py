"""
Catalog API: Shared Response Schemas
======================================

What:  Response models shared by every route: update acknowledgments,
       the error envelope, and the health probe.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    Acknowledgment returned by update operations.

    Updates never echo the updated record; clients re-read it if needed.
    """
    message: str = Field(description="Human-readable acknowledgment")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "category with ID '...' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    pending_cascades: int = Field(description="Category cascades still removing products")
    uptime_seconds: float = Field(description="Seconds since service started")
