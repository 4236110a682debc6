"""Collection entity for dynamic schema definitions.

Collections are user-defined record schemas. The ordered field list is
both the display order and the CSV column order.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from cmsbase.domain.entities.field import Field


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Collection:
    """Collection entity representing a named record schema.

    Attributes:
        id: Unique identifier (``col_`` prefixed).
        name: Collection name.
        slug: URL-safe identifier. Uniqueness is not enforced by the store.
        fields: Ordered field definitions.
        item_count: Cached number of items owned by this collection.
        created_at: ISO-8601 timestamp when the collection was created.
        updated_at: ISO-8601 timestamp of the last mutation.
    """

    id: str
    name: str
    slug: str
    fields: list[Field] = field(default_factory=list)
    item_count: int = 0
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Collection ID is required")

    def get_field(self, field_id: str) -> Optional[Field]:
        """Return the field with ``field_id``, or None."""
        return next((f for f in self.fields if f.id == field_id), None)

    @property
    def field_keys(self) -> list[str]:
        return [f.key for f in self.fields]

    @property
    def primary_field(self) -> Optional[Field]:
        """The field flagged primary, falling back to the first field."""
        primary = next((f for f in self.fields if f.is_primary), None)
        if primary is not None:
            return primary
        return self.fields[0] if self.fields else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the external camelCase representation."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "fields": [f.to_dict() for f in self.fields],
            "itemCount": self.item_count,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
