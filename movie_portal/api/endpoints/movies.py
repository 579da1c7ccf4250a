# movie_portal/api/endpoints/movies.py

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from movie_portal.api.deps import get_movie_service
from movie_portal.models.acknowledgement import DeleteAck, InsertAck, UpdateAck
from movie_portal.services.movie_service import (
    InvalidMovieError,
    InvalidUpdateError,
    MovieNotFoundError,
    MovieService,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "", # GET /movies
    response_model=List[Dict[str, Any]],
    summary="List Movies",
    description="Retrieve movie documents, optionally capped by `limit` (0 or absent means no cap).",
)
async def list_movies(
    limit: int = Query(0, ge=0, description="Maximum number of movies to return; 0 returns all."),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.list_movies(limit=limit)
    except Exception as e:
        logger.error(f"Error listing movies: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving movies."
        )


@router.get(
    "/{movie_id}", # GET /movies/{movie_id}
    response_model=Dict[str, Any],
    summary="Get Movie",
    responses={404: {"description": "Movie not found"}},
)
async def get_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Fetches a single movie by its database ID.
    A malformed ID is reported as a server error, not as not-found.
    """
    try:
        return await movie_service.get_movie_by_id(movie_id)
    except MovieNotFoundError:
        logger.warning(f"Movie not found attempt: ID {movie_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Movie with ID '{movie_id}' not found."
        )
    except Exception as e:
        logger.error(f"Error getting movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving the movie."
        )


@router.post(
    "", # POST /movies
    response_model=InsertAck,
    status_code=status.HTTP_200_OK,
    summary="Create Movie",
    description="Stores any JSON object as a movie and returns the insert acknowledgement.",
)
async def create_movie(
    movie: Dict[str, Any] = Body(...),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.create_movie(movie)
    except InvalidMovieError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating movie: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error."
        )


@router.put(
    "/{movie_id}", # PUT /movies/{movie_id}
    response_model=UpdateAck,
    summary="Update Movie",
    description="Sets the given fields on a movie. An unknown ID yields a zero-count acknowledgement.",
)
async def update_movie(
    movie_id: str,
    fields: Dict[str, Any] = Body(...),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.update_movie(movie_id, fields)
    except InvalidUpdateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while updating the movie."
        )


@router.delete(
    "/{movie_id}", # DELETE /movies/{movie_id}
    response_model=DeleteAck,
    summary="Delete Movie",
    responses={404: {"description": "Movie not found"}},
)
async def delete_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.delete_movie(movie_id)
    except MovieNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Movie with ID '{movie_id}' not found."
        )
    except Exception as e:
        logger.error(f"Error deleting movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while deleting the movie."
        )
