"""Aggregate statistics over the store."""

from typing import Any, Optional

from cmsbase.core.config import Settings, get_settings
from cmsbase.domain.entities.cms_stats import CMSStats


class StatsService:
    """Computes usage counters from a store snapshot.

    The totals are derived from the cached ``item_count`` of each
    collection, so they always agree with what collection listings show.
    """

    def __init__(self, store: Any, settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or get_settings()

    def get_cms_stats(self) -> CMSStats:
        collections = self.store.get_collections()
        return CMSStats(
            total_items=sum(c.item_count for c in collections),
            item_limit=self.settings.item_limit,
            total_collections=len(collections),
        )
