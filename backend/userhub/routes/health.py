"""
UserHub Backend - Health Check Route
=====================================

What:  GET /health for monitoring and container probes.
How:   Runs SELECT 1 against the application's database.

Status levels:
    healthy:   database reachable
    unhealthy: database unreachable (the body says so; status code stays 200
               so probes can read the details)
"""

import logging
import time

from fastapi import APIRouter, Depends

from userhub import __version__
from userhub.database import Database, get_database
from userhub.schemas.user import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
