"""Aggregate usage counters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CMSStats:
    """Process-wide usage counters derived from the schema model.

    Attributes:
        total_items: Sum of item_count over all collections.
        item_limit: Advertised item quota.
        total_collections: Number of collections.
    """

    total_items: int
    item_limit: int
    total_collections: int

    def to_dict(self) -> dict[str, int]:
        return {
            "totalItems": self.total_items,
            "itemLimit": self.item_limit,
            "totalCollections": self.total_collections,
        }
