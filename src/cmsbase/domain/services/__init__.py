"""Domain services for CMSBase.

Services contain business logic that operates on domain entities.
They are stateless and have no infrastructure dependencies.
"""

from cmsbase.domain.services.collection_validator import (
    CollectionValidationError,
    CollectionValidator,
)
from cmsbase.domain.services.id_generator import IdGenerator
from cmsbase.domain.services.slug_generator import SlugGenerator, SlugValidationError
from cmsbase.domain.services.stats_service import StatsService
from cmsbase.domain.services.value_coercer import ValueCoercer

__all__ = [
    "CollectionValidationError",
    "CollectionValidator",
    "IdGenerator",
    "SlugGenerator",
    "SlugValidationError",
    "StatsService",
    "ValueCoercer",
]
