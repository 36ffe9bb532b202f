"""
Pet Adoption API — Root & Health Check Routes
==============================================

What:  GET / (service banner) and GET /health (monitoring probe).
How:   /health round-trips `SELECT 1` through the record store.

Status levels:
    - healthy:   record store reachable (HTTP 200)
    - unhealthy: record store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from adoption_api import __version__
from adoption_api.dependencies import Services, get_services
from adoption_api.exceptions import StoreError
from adoption_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", summary="Service banner")
async def root() -> dict:
    return {"message": "Pet Adoption API", "version": __version__}


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Record store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    services: Services = Depends(get_services),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await services.store.ping()
    except StoreError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: record store unreachable: %s", e.detail)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
