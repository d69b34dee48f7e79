"""MongoDB connection management for serverless invocations.

The connection is established lazily on the first request and the handle is
reused by every later request in the same process. A failed attempt is not
remembered, so the next request starts over.
"""
import logging
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from .config import Settings
from .errors import ConfigurationError, StoreConnectionError


logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "test"


class ConnectionManager:
    """Owns the memoized document-store handle.

    Args:
        settings: Application settings (connection string, db name, timeout)
        client_factory: Callable building the driver client; tests inject a fake
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ):
        self._settings = settings
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def ensure_connected(self) -> AsyncIOMotorDatabase:
        """Return the shared database handle, connecting on first use.

        Raises:
            ConfigurationError: MONGO_URI is not set
            StoreConnectionError: the server could not be reached
        """
        if self._db is not None:
            return self._db

        mongo_uri = self._settings.mongo_uri
        if not mongo_uri:
            raise ConfigurationError(
                "Database connection failed",
                "MONGO_URI environment variable is not set.",
            )

        logger.info("Connecting to MongoDB...")
        client = None
        try:
            client = self._client_factory(
                mongo_uri,
                serverSelectionTimeoutMS=self._settings.mongo_connect_timeout_ms,
            )
            # The driver connects lazily; ping forces the round trip now.
            await client.admin.command("ping")
            db = self._select_database(client)
        except (PyMongoError, ValueError) as e:
            logger.error("MongoDB connection error: %s", e, exc_info=True)
            if client is not None:
                client.close()
            raise StoreConnectionError("Database connection failed", str(e)) from e

        # A concurrent cold-start request may have connected while we pinged.
        if self._db is not None:
            client.close()
            return self._db

        self._client = client
        self._db = db
        logger.info("Successfully connected to MongoDB (database=%s)", db.name)
        return db

    def _select_database(self, client) -> AsyncIOMotorDatabase:
        if self._settings.mongo_db_name:
            return client[self._settings.mongo_db_name]
        return client.get_default_database(default=DEFAULT_DB_NAME)

    def reset(self) -> None:
        """Drop the cached handle and close the client."""
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None
