# FastAPI dependencies (store and services)
# movie_portal/api/deps.py

import logging

from fastapi import Depends, HTTPException, Request, status

from movie_portal.core.config import settings
from movie_portal.data_access.mongo_client import MongoStore
from movie_portal.services.favorite_service import FavoriteService
from movie_portal.services.movie_service import MovieService

logger = logging.getLogger(__name__)


async def initialize_store() -> MongoStore:
    """
    Builds and connects the process-wide store.
    Call this during FastAPI startup using lifespan events; failures propagate.
    """
    logger.info("Initializing MongoDB store...")
    store = MongoStore(settings.mongodb_uri(), settings.MONGODB_DB_NAME)
    await store.connect()
    return store


def close_store(store: MongoStore) -> None:
    """Closes the store. Call this during FastAPI shutdown."""
    logger.info("Closing MongoDB store...")
    store.close()


# --- Store Dependency ---

def get_store(request: Request) -> MongoStore:
    """
    FastAPI dependency returning the store owned by the application lifespan.

    Raises:
        HTTPException 503: If the store was never initialized.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.critical("MongoDB store is not available. Check initialization.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available.",
        )
    return store


# --- Service Dependencies ---

def get_movie_service(store: MongoStore = Depends(get_store)) -> MovieService:
    return MovieService(collection=store.movies)


def get_favorite_service(store: MongoStore = Depends(get_store)) -> FavoriteService:
    return FavoriteService(collection=store.favorites)
