"""
Shared pieces of the stored PortfolioHub documents.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_object_id(value: Any) -> ObjectId:
    """
    Coerce a Mongo id given as ObjectId or hex string.

    Raises:
        ValueError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Invalid ObjectId: {value!r}")


# ObjectId in Python dumps (what pymongo stores), hex string in JSON
PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(to_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class BaseDocument(BaseModel):
    """
    A document stored in its own MongoDB collection.

    The Mongo ``_id`` is exposed as ``id``; it stays None until the
    document has been inserted.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def document_id(self) -> str:
        """Hex form of the id, empty before insertion."""
        return str(self.id) if self.id is not None else ""

    def touch(self) -> None:
        self.updated_at = utc_now()

    def model_dump_mongo(self) -> dict[str, Any]:
        """Dump for insertion: aliased keys, ``_id`` omitted while unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EmbeddedDocument(BaseModel):
    """A subdocument stored inside its parent, with no id of its own."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
