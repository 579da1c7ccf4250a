# /health endpoints
# movie_portal/api/endpoints/health.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from movie_portal.api.deps import get_store
from movie_portal.data_access.mongo_client import MongoStore
from movie_portal.models.common import DatabaseHealthResponse, HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Perform a Health Check",
)
async def health_check():
    """Liveness check; does not touch the database."""
    return HealthResponse(status="ok")


@router.get(
    "/db",
    response_model=DatabaseHealthResponse,
    summary="Check Database Connectivity",
    responses={503: {"description": "Database unreachable"}},
)
async def database_health_check(store: MongoStore = Depends(get_store)):
    if not await store.ping():
        logger.warning("Database health check failed.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available.",
        )
    return DatabaseHealthResponse(status="ok", database=store.db_name)
