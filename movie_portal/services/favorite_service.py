# movie_portal/services/favorite_service.py

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from movie_portal.models.acknowledgement import FavoriteCreated, FavoriteRemoved
from movie_portal.utils.helpers import extract_movie_id, serialize_documents

logger = logging.getLogger(__name__)

class FavoriteNotFoundError(Exception):
    """Raised when no favorite matches the movie ID and user email."""
    pass

class DuplicateFavoriteError(Exception):
    """Raised when the user already has this movie in their favorites."""
    pass

class InvalidFavoriteError(ValueError):
    """Raised when a favorite is missing a required field."""
    pass

class FavoriteService:
    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initializes the Favorite Service.

        Args:
            collection: The 'favorites' collection of the store.
        """
        self.collection = collection

    async def list_favorites(self, user_email: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Retrieves favorites, optionally only those of one user.

        Raises:
            InvalidFavoriteError: If `user_email` is given but blank.
            PyMongoError: If a database error occurs.
        """
        query: Dict[str, Any] = {}
        if user_email is not None:
            user_email = user_email.strip()
            if not user_email:
                raise InvalidFavoriteError("A user email is required.")
            query["userEmail"] = user_email

        try:
            docs = await self.collection.find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Database error fetching favorites with query {query}: {e}", exc_info=True)
            raise
        logger.info(f"Fetched {len(docs)} favorites with query: {query}")
        return serialize_documents(docs)

    def _prepare_favorite(self, favorite: Any) -> Dict[str, Any]:
        """Validates presence of required fields and normalizes the identifier into `movieId`."""
        if not favorite:
            raise InvalidFavoriteError("Favorite data is required.")
        if not isinstance(favorite, dict):
            raise InvalidFavoriteError("Favorite data must be a JSON object.")

        user_email = favorite.get("userEmail")
        if not isinstance(user_email, str) or not user_email.strip():
            raise InvalidFavoriteError("userEmail is required.")

        try:
            movie_id = extract_movie_id(favorite)
        except ValueError as e:
            raise InvalidFavoriteError(str(e))
        if movie_id is None:
            raise InvalidFavoriteError("A movie identifier (movieId) is required.")

        # The favorite gets its own ObjectId; the movie's id lives in movieId
        favorite_doc = {k: v for k, v in favorite.items() if k not in ("_id", "id")}
        favorite_doc["movieId"] = movie_id
        favorite_doc["userEmail"] = user_email.strip()
        favorite_doc.setdefault("addedAt", datetime.now(timezone.utc))
        return favorite_doc

    async def add_favorite(self, favorite: Any) -> FavoriteCreated:
        """
        Adds a movie to a user's favorites.

        The pre-insert lookup catches the common duplicate; the unique index
        on (movieId, userEmail) rejects a concurrent one that slips past it.

        Raises:
            InvalidFavoriteError: If the body is not an object, or userEmail or the movie
                identifier is missing or malformed.
            DuplicateFavoriteError: If the user already favorited this movie.
            PyMongoError: If a database error occurs.
        """
        favorite_doc = self._prepare_favorite(favorite)
        key = {"movieId": favorite_doc["movieId"], "userEmail": favorite_doc["userEmail"]}

        try:
            existing = await self.collection.find_one(key)
            if existing is not None:
                logger.warning(f"Favorite already exists for {key}")
                raise DuplicateFavoriteError("This movie is already in the user's favorites.")
            result = await self.collection.insert_one(favorite_doc)
        except DuplicateKeyError:
            logger.warning(f"Concurrent duplicate favorite rejected by unique index for {key}")
            raise DuplicateFavoriteError("This movie is already in the user's favorites.")
        except PyMongoError as e:
            logger.error(f"Database error adding favorite {key}: {e}", exc_info=True)
            raise

        logger.info(f"Favorite added: Movie {key['movieId']}, User {key['userEmail']}, ID {result.inserted_id}")
        return FavoriteCreated.from_insert(result, favorite_doc)

    async def remove_favorite(self, movie_id: str, user_email: Optional[str]) -> FavoriteRemoved:
        """
        Removes one user's favorite for a movie.

        Raises:
            InvalidFavoriteError: If the email is missing or blank.
            FavoriteNotFoundError: If nothing matched.
            PyMongoError: If a database error occurs.
        """
        if user_email is None or not user_email.strip():
            raise InvalidFavoriteError("The email query parameter is required.")

        key = {"movieId": movie_id, "userEmail": user_email.strip()}
        try:
            result = await self.collection.delete_one(key)
        except PyMongoError as e:
            logger.error(f"Database error removing favorite {key}: {e}", exc_info=True)
            raise

        if result.deleted_count == 0:
            logger.warning(f"No favorite to remove for {key}")
            raise FavoriteNotFoundError("Favorite not found.")
        logger.info(f"Favorite removed: Movie {movie_id}, User {key['userEmail']}")
        return FavoriteRemoved(deleted_count=result.deleted_count)
