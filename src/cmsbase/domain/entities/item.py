"""Item entity: one record of a collection."""

from dataclasses import dataclass, field
from typing import Any

from cmsbase.domain.entities.collection import utc_now
from cmsbase.domain.entities.field import Scalar


@dataclass
class Item:
    """A single record.

    The data map is keyed by field key. Keys need not cover every field
    and keys unknown to the schema are kept as-is.

    Attributes:
        id: Unique identifier (``item_`` prefixed).
        collection_id: Owning collection. A weak reference.
        data: Field key to scalar value.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 timestamp of the last data replacement.
    """

    id: str
    collection_id: str
    data: dict[str, Scalar] = field(default_factory=dict)
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Item ID is required")
        if not isinstance(self.data, dict):
            raise ValueError("Item data must be a dictionary")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "collectionId": self.collection_id,
            "data": dict(self.data),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
