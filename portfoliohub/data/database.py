"""
MongoDB access for PortfolioHub.

One PyMongo client serves the synchronous repositories and one Motor
client serves the async matching path. Both are created on first use.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, IndexModel, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from portfoliohub.utils.config import DatabaseSettings, get_settings
from portfoliohub.utils.logger import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
PROJECTS_COLLECTION = "projects"

# Indexes backing the user lookup and the open-project candidate scan
COLLECTION_INDEXES: dict[str, list[IndexModel]] = {
    USERS_COLLECTION: [
        IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
        IndexModel([("role", ASCENDING)], name="role"),
    ],
    PROJECTS_COLLECTION: [
        IndexModel(
            [("status", ASCENDING), ("created_at", ASCENDING), ("_id", ASCENDING)],
            name="open_projects_scan",
        ),
        IndexModel([("creator_id", ASCENDING)], name="creator"),
        IndexModel([("skills.skill_id", ASCENDING)], name="skill_ids"),
        IndexModel([("category_ids", ASCENDING)], name="category_ids"),
    ],
}

CLIENT_OPTIONS = {
    "serverSelectionTimeoutMS": 5000,
    "connectTimeoutMS": 5000,
    "maxPoolSize": 50,
    "tz_aware": True,
}


class DatabaseManager:
    """Lazily created MongoDB clients for one configured database."""

    def __init__(self, settings: Optional[DatabaseSettings] = None) -> None:
        self._settings = settings or get_settings().database
        self._sync_client: Optional[MongoClient] = None
        self._async_client: Optional[AsyncIOMotorClient] = None

    @property
    def database_name(self) -> str:
        return self._settings.name

    # -------------------------------------------------------------------------
    # Synchronous access
    # -------------------------------------------------------------------------

    @property
    def sync_database(self) -> Database:
        if self._sync_client is None:
            logger.info(f"Connecting to MongoDB at {self._settings.host}:{self._settings.port}")
            self._sync_client = MongoClient(self._settings.connection_string, **CLIENT_OPTIONS)
        return self._sync_client[self.database_name]

    def collection(self, name: str) -> Collection:
        return self.sync_database[name]

    def ping(self) -> bool:
        """Return True if the server answers; drop the client otherwise."""
        try:
            self.sync_database.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            self._close_sync()
            return False

    # -------------------------------------------------------------------------
    # Asynchronous access
    # -------------------------------------------------------------------------

    @property
    def async_database(self) -> AsyncIOMotorDatabase:
        if self._async_client is None:
            logger.info(f"Connecting async client to MongoDB at {self._settings.host}:{self._settings.port}")
            self._async_client = AsyncIOMotorClient(self._settings.connection_string, **CLIENT_OPTIONS)
        return self._async_client[self.database_name]

    def async_collection(self, name: str) -> AsyncIOMotorCollection:
        return self.async_database[name]

    async def ensure_indexes(self) -> None:
        """Create every index in COLLECTION_INDEXES (existing ones are kept)."""
        for name, indexes in COLLECTION_INDEXES.items():
            created = await self.async_collection(name).create_indexes(indexes)
            logger.info(f"Indexes on {name}: {', '.join(created)}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _close_sync(self) -> None:
        if self._sync_client is not None:
            self._sync_client.close()
            self._sync_client = None

    def close(self) -> None:
        """Close both clients; they are recreated on next use."""
        self._close_sync()
        if self._async_client is not None:
            self._async_client.close()
            self._async_client = None
        logger.info("MongoDB clients closed")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
