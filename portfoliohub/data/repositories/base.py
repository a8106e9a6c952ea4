"""
Generic MongoDB repository.

Subclasses name a collection and a document model; this class turns raw
Mongo documents into validated models on the way out. Reads exist in a
sync (PyMongo) and an async (Motor) flavor, writes are sync only.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from portfoliohub.data.database import DatabaseManager, get_database_manager
from portfoliohub.data.models.base import BaseDocument, to_object_id
from portfoliohub.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseDocument)

IdLike = str | ObjectId


class BaseRepository(ABC, Generic[T]):
    """CRUD over one collection, returning ``model_class`` instances."""

    @property
    @abstractmethod
    def collection_name(self) -> str: ...

    @property
    @abstractmethod
    def model_class(self) -> type[T]: ...

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or get_database_manager()

    @property
    def collection(self) -> Collection:
        return self._db_manager.collection(self.collection_name)

    @property
    def async_collection(self) -> AsyncIOMotorCollection:
        return self._db_manager.async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _to_object_id(id_value: IdLike) -> Optional[ObjectId]:
        """ObjectId for ``id_value``, or None when it cannot be one."""
        try:
            return to_object_id(id_value)
        except ValueError:
            return None

    @staticmethod
    def _sort_keys(sort_by: Optional[str], sort_order: int) -> list[tuple[str, int]]:
        # Tie on _id keeps ordering deterministic across equal sort keys
        field = sort_by or "created_at"
        direction = ASCENDING if sort_order >= 0 else DESCENDING
        return [(field, direction), ("_id", direction)]

    def _validate(self, documents: list[dict[str, Any]]) -> list[T]:
        return [self.model_class.model_validate(doc) for doc in documents]

    def _find_cursor(
        self,
        collection: Any,
        query: dict[str, Any],
        skip: int,
        limit: int,
        sort_by: Optional[str],
        sort_order: int,
    ) -> Any:
        # PyMongo and Motor cursors share this chaining API
        return (
            collection.find(query)
            .sort(self._sort_keys(sort_by, sort_order))
            .skip(skip)
            .limit(limit)
        )

    # -------------------------------------------------------------------------
    # Sync
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Insert ``model`` and set its id."""
        model.touch()
        model.id = self.collection.insert_one(model.model_dump_mongo()).inserted_id
        logger.debug(f"Inserted {self.collection_name}/{model.id}")
        return model

    def get_by_id(self, id_value: IdLike) -> Optional[T]:
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None
        document = self.collection.find_one({"_id": object_id})
        return self.model_class.model_validate(document) if document else None

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """
        Documents matching ``query``.

        Sorted by ``sort_by`` (default ``created_at``) then ``_id`` in the
        same direction, so equal keys come back in a stable order.
        """
        cursor = self._find_cursor(self.collection, query, skip, limit, sort_by, sort_order)
        return self._validate(list(cursor))

    def update(self, id_value: IdLike, changes: dict[str, Any]) -> Optional[T]:
        """
        Validate ``changes`` against the model and ``$set`` them.

        The stored document is merged with ``changes`` and re-validated, so
        field validators (identifier normalization, enum checks) apply to
        updates exactly as they do on insert.

        Returns:
            The updated document, or None if it does not exist

        Raises:
            ValueError: If ``changes`` names a field the model does not have
            pydantic.ValidationError: If a changed value is invalid
        """
        unknown = set(changes) - (set(self.model_class.model_fields) - {"id"})
        if unknown:
            raise ValueError(f"Unknown {self.collection_name} fields: {sorted(unknown)}")

        current = self.get_by_id(id_value)
        if current is None:
            return None
        updated = self.model_class.model_validate({**current.model_dump(), **changes})
        updated.touch()

        values = updated.model_dump(include=set(changes) | {"updated_at"})
        result = self.collection.update_one({"_id": updated.id}, {"$set": values})
        if result.matched_count == 0:
            return None
        logger.debug(f"Updated {self.collection_name}/{updated.id}: {sorted(changes)}")
        return updated

    def delete(self, id_value: IdLike) -> bool:
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return False
        deleted = self.collection.delete_one({"_id": object_id}).deleted_count > 0
        if deleted:
            logger.debug(f"Deleted {self.collection_name}/{object_id}")
        return deleted

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    # -------------------------------------------------------------------------
    # Async
    # -------------------------------------------------------------------------

    async def get_by_id_async(self, id_value: IdLike) -> Optional[T]:
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None
        document = await self.async_collection.find_one({"_id": object_id})
        return self.model_class.model_validate(document) if document else None

    async def find_async(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Async variant of ``find`` with the same ordering."""
        cursor = self._find_cursor(
            self.async_collection, query, skip, limit, sort_by, sort_order
        )
        return self._validate(await cursor.to_list(length=limit))
