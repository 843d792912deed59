"""
Catalog API: Health Check Route
=================================

What:  Health endpoint for load balancers and container probes.
How:   Runs SELECT 1 against the database and reports how many category
       cascades are still removing products.

Status levels:
    healthy:    database reachable (HTTP 200)
    unhealthy:  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from catalog import __version__
from catalog.database import Database, get_database
from catalog.schemas.common import HealthResponse
from catalog.services.cascade import CascadeDeleter, get_cascade

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
    cascade: CascadeDeleter = Depends(get_cascade),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        pending_cascades=cascade.pending,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
