"""Domain entities for CMSBase.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from cmsbase.domain.entities.cms_stats import CMSStats
from cmsbase.domain.entities.collection import Collection, utc_now
from cmsbase.domain.entities.field import Field, FieldType, Scalar
from cmsbase.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)
from cmsbase.domain.entities.item import Item

__all__ = [
    "AbortHookException",
    "CMSStats",
    "Collection",
    "Field",
    "FieldType",
    "HookContext",
    "HookResult",
    "Item",
    "Scalar",
    "utc_now",
]
