# MongoDB connection and collection access
# movie_portal/data_access/mongo_client.py

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

logger = logging.getLogger(__name__)

MOVIES_COLLECTION = "movies"
FAVORITES_COLLECTION = "favorites"
FAVORITE_UNIQUE_INDEX = "movieId_userEmail_unique"


class MongoStore:
    """
    Owns the Motor client for the process and exposes the two collections
    the API works with.

    Constructed by the application lifespan, opened once at startup and
    closed on shutdown.
    """

    def __init__(self, uri: str, db_name: str):
        self._uri = uri
        self.db_name = db_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """
        Creates the client, pings the deployment and ensures indexes.

        Raises:
            PyMongoError: If the deployment cannot be reached. Startup is not
                guarded, so this aborts the application.
        """
        logger.info(f"Connecting to MongoDB: {self._uri[:15]}...") # Log partial URI safely
        self.client = AsyncIOMotorClient(
            self._uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
        await self.client.admin.command("ping")
        self.db = self.client[self.db_name]
        logger.info(f"Pinged your deployment. Using database: '{self.db_name}'")
        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        """Enforces one favorite per (movieId, userEmail) at the store layer."""
        await self.favorites.create_index(
            [("movieId", ASCENDING), ("userEmail", ASCENDING)],
            unique=True,
            name=FAVORITE_UNIQUE_INDEX,
        )
        logger.debug(f"Ensured index '{FAVORITE_UNIQUE_INDEX}' on '{FAVORITES_COLLECTION}'")

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        if self.db is None:
            logger.critical(f"Database not available for collection {name}")
            raise ConnectionError(f"Database connection not available for {name}")
        return self.db[name]

    @property
    def movies(self) -> AsyncIOMotorCollection:
        return self._collection(MOVIES_COLLECTION)

    @property
    def favorites(self) -> AsyncIOMotorCollection:
        return self._collection(FAVORITES_COLLECTION)

    async def ping(self) -> bool:
        """Returns True when the deployment answers a ping."""
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}", exc_info=True)
            return False

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB client closed.")
        self.client = None
        self.db = None
