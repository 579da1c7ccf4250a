# movie_portal/api/endpoints/favorites.py

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from movie_portal.api.deps import get_favorite_service
from movie_portal.models.acknowledgement import FavoriteCreated, FavoriteRemoved
from movie_portal.services.favorite_service import (
    DuplicateFavoriteError,
    FavoriteNotFoundError,
    FavoriteService,
    InvalidFavoriteError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "", # GET /favorites
    response_model=List[Dict[str, Any]],
    summary="List Favorites",
)
async def list_favorites(
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.list_favorites()
    except Exception as e:
        logger.error(f"Error listing favorites: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving favorites."
        )


@router.get(
    "/", # GET /favorites/ (empty email segment)
    include_in_schema=False,
)
async def list_user_favorites_without_email():
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A user email is required.")


@router.get(
    "/{email}", # GET /favorites/{email}
    response_model=List[Dict[str, Any]],
    summary="List a User's Favorites",
    responses={400: {"description": "Email is empty"}},
)
async def list_user_favorites(
    email: str,
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.list_favorites(user_email=email)
    except InvalidFavoriteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing favorites for {email}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving favorites."
        )


@router.post(
    "", # POST /favorites
    response_model=FavoriteCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Add Favorite",
    description="Adds a movie to a user's favorites. The body needs `userEmail` and a movie identifier.",
    responses={
        400: {"description": "Missing userEmail or movie identifier"},
        409: {"description": "Movie already in the user's favorites"},
    }
)
async def add_favorite(
    favorite: Any = Body(None),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.add_favorite(favorite)
    except InvalidFavoriteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateFavoriteError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Error adding favorite: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error."
        )


@router.delete(
    "/{movie_id}", # DELETE /favorites/{movie_id}?email=...
    response_model=FavoriteRemoved,
    summary="Remove Favorite",
    responses={404: {"description": "Favorite not found"}},
)
async def remove_favorite(
    movie_id: str,
    email: Optional[str] = Query(None, description="Email of the user whose favorite is removed."),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.remove_favorite(movie_id, email)
    except InvalidFavoriteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except FavoriteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error removing favorite {movie_id} for {email}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error."
        )
