# movie_portal/services/movie_service.py

import logging
from typing import Any, Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from movie_portal.models.acknowledgement import DeleteAck, InsertAck, UpdateAck
from movie_portal.utils.helpers import serialize_document, serialize_documents, to_object_id

logger = logging.getLogger(__name__)

class MovieNotFoundError(Exception):
    """Custom exception when a movie is not found."""
    pass

class InvalidUpdateError(ValueError):
    """Raised when an update body carries no settable fields."""
    pass

class InvalidMovieError(ValueError):
    """Raised when a new movie carries an `_id` that is not an ObjectId."""
    pass

class MovieService:
    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initializes the Movie Service.

        Args:
            collection: The 'movies' collection of the store.
        """
        self.collection = collection

    async def list_movies(self, limit: int = 0) -> List[Dict[str, Any]]:
        """
        Retrieves movie documents.

        Args:
            limit: Maximum number of documents; 0 means no limit.

        Returns:
            The documents with `_id` rendered as a string.

        Raises:
            PyMongoError: If a database error occurs.
        """
        try:
            cursor = self.collection.find()
            if limit:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)
            logger.info(f"Fetched {len(docs)} movies (limit={limit or 'none'})")
            return serialize_documents(docs)
        except PyMongoError as e:
            logger.error(f"Database error while fetching movies: {e}", exc_info=True)
            raise

    async def get_movie_by_id(self, movie_id: str) -> Dict[str, Any]:
        """
        Retrieves a single movie by its ObjectId string.

        Raises:
            MovieNotFoundError: If no movie has this ID.
            bson.errors.InvalidId: If the ID is not a valid ObjectId.
            PyMongoError: If a database error occurs.
        """
        obj_id = to_object_id(movie_id)
        try:
            movie_doc = await self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"Database error while fetching movie {movie_id}: {e}", exc_info=True)
            raise

        if movie_doc is None:
            logger.warning(f"Movie with ID {movie_id} not found in database.")
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.debug(f"Found movie with ID: {movie_id}")
        return serialize_document(movie_doc)

    async def create_movie(self, movie: Dict[str, Any]) -> InsertAck:
        """
        Inserts the document as sent; the store assigns `_id` when absent.

        A client `_id` must be an ObjectId hex string so the movie stays
        addressable by the id routes; it is stored as an ObjectId.

        Raises:
            InvalidMovieError: If `_id` is present but not a valid ObjectId.
            PyMongoError: If a database error occurs.
        """
        # insert_one adds _id to the dict it is given
        movie_doc = dict(movie)
        if "_id" in movie_doc:
            client_id = movie_doc["_id"]
            if not isinstance(client_id, str) or not ObjectId.is_valid(client_id):
                raise InvalidMovieError("_id must be a 24-character hex ObjectId.")
            movie_doc["_id"] = ObjectId(client_id)
        try:
            result = await self.collection.insert_one(movie_doc)
        except PyMongoError as e:
            logger.error(f"Database error creating movie: {e}", exc_info=True)
            raise
        logger.info(f"Movie created with ID {result.inserted_id}")
        return InsertAck.from_result(result)

    async def update_movie(self, movie_id: str, fields: Dict[str, Any]) -> UpdateAck:
        """
        Sets the given fields on a movie.

        An ID that matches nothing is not an error: the acknowledgement
        simply reports zero matched documents.

        Raises:
            InvalidUpdateError: If there are no fields to set.
            bson.errors.InvalidId: If the ID is not a valid ObjectId.
            PyMongoError: If a database error occurs.
        """
        # _id is immutable in MongoDB
        update_fields = {k: v for k, v in fields.items() if k != "_id"}
        if not update_fields:
            raise InvalidUpdateError("Update body must contain at least one field to set.")

        obj_id = to_object_id(movie_id)
        try:
            result = await self.collection.update_one({"_id": obj_id}, {"$set": update_fields})
        except PyMongoError as e:
            logger.error(f"Database error updating movie {movie_id}: {e}", exc_info=True)
            raise
        logger.info(
            f"Updated movie {movie_id}: matched={result.matched_count}, modified={result.modified_count}"
        )
        return UpdateAck.from_result(result)

    async def delete_movie(self, movie_id: str) -> DeleteAck:
        """
        Deletes one movie by ID.

        Raises:
            MovieNotFoundError: If nothing was deleted.
            bson.errors.InvalidId: If the ID is not a valid ObjectId.
            PyMongoError: If a database error occurs.
        """
        obj_id = to_object_id(movie_id)
        try:
            result = await self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"Database error deleting movie {movie_id}: {e}", exc_info=True)
            raise

        if result.deleted_count == 0:
            logger.warning(f"Delete requested for missing movie {movie_id}")
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.info(f"Deleted movie {movie_id}")
        return DeleteAck.from_result(result)
