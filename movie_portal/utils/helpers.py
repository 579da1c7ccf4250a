# movie_portal/utils/helpers.py

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId

logger = logging.getLogger(__name__)

# --- Identifier Helpers ---

def to_object_id(id_str: str) -> ObjectId:
    """
    Converts a path identifier into a MongoDB ObjectId.

    Args:
        id_str: The 24-character hex string sent by the client.

    Returns:
        The matching ObjectId.

    Raises:
        bson.errors.InvalidId: If the string is not a valid ObjectId.
    """
    return ObjectId(id_str)


def extract_movie_id(document: Mapping[str, Any]) -> Optional[str]:
    """
    Reads the movie identifier a favorite refers to.

    Looks at `movieId` first, then at the `_id` / `id` of the movie
    document the client posted. Returns None if none is present or blank.

    Raises:
        ValueError: If the identifier is not a string, integer or ObjectId.
    """
    for key in ("movieId", "_id", "id"):
        value = document.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (str, int, ObjectId)):
            raise ValueError(f"{key} must be a string, integer or ObjectId.")
        value = str(value).strip()
        if value:
            return value
    return None

# --- Serialization Helpers ---

def serialize_value(value: Any) -> Any:
    """Makes BSON values JSON friendly (ObjectId -> hex string, datetime -> ISO 8601)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def serialize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    return serialize_value(document)


def serialize_documents(documents: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(doc) for doc in documents]
