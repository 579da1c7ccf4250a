# movie_portal/models/acknowledgement.py

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from movie_portal.utils.helpers import serialize_value

# --- Write Acknowledgements ---
# Field names follow the driver acknowledgements clients already consume.

class InsertAck(BaseModel):
    """Acknowledgement returned after inserting a document."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    inserted_id: str = Field(..., alias="insertedId", description="ObjectId assigned by the store, as hex.")

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertAck":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateAck(BaseModel):
    """Acknowledgement returned after an update, including when nothing matched."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")
    upserted_id: Optional[str] = Field(None, alias="upsertedId")

    @classmethod
    def from_result(cls, result: UpdateResult) -> "UpdateAck":
        upserted = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(upserted) if upserted is not None else None,
        )


class DeleteAck(BaseModel):
    """Acknowledgement returned after deleting a document."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(..., alias="deletedCount")

    @classmethod
    def from_result(cls, result: DeleteResult) -> "DeleteAck":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


class FavoriteCreated(InsertAck):
    """Insert acknowledgement plus the stored favorite document."""
    favorite: Dict[str, Any]

    @classmethod
    def from_insert(cls, result: InsertOneResult, document: Dict[str, Any]) -> "FavoriteCreated":
        return cls(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
            favorite=serialize_value(document),
        )


class FavoriteRemoved(BaseModel):
    """Response after a favorite is removed."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    deleted_count: int = Field(..., alias="deletedCount")
