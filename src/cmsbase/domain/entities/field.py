"""Field entity for collection schema columns.

A field names one attribute of the items in a collection. Its type is
advisory metadata: the store keeps values untyped and only the codec
and editors consult the type for coercion hints.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Union

Scalar = Union[str, int, float, bool, None]


class FieldType(str, Enum):
    """Supported field types for collection schemas."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    IMAGE = "image"
    RICHTEXT = "richtext"
    URL = "url"
    EMAIL = "email"
    REFERENCE = "reference"


# External (camelCase) attribute names mapped to dataclass attributes
_EXTERNAL_NAMES = {
    "defaultValue": "default_value",
    "isPrimary": "is_primary",
}
_DEFINITION_ATTRIBUTES = frozenset(
    {"name", "key", "type", "required", "default_value", "is_primary"}
)


@dataclass
class Field:
    """Schema column definition.

    Attributes:
        id: Unique identifier, immutable once assigned.
        name: Human-readable label, any characters allowed.
        key: Attribute name used to index into an item's data map.
        type: One of the FieldType values.
        required: Advisory flag, never enforced by the store.
        default_value: Scalar used to pre-populate new items.
        is_primary: Marks the display column of the collection.
    """

    id: str
    name: str
    key: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    default_value: Scalar = None
    is_primary: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Field ID is required")
        if not isinstance(self.type, FieldType):
            try:
                self.type = FieldType(str(self.type).lower())
            except ValueError:
                raise ValueError(f"Unknown field type '{self.type}'") from None

    @staticmethod
    def normalize_definition(definition: Mapping[str, Any]) -> dict[str, Any]:
        """Translate a field definition into dataclass attribute names.

        Accepts both snake_case and the camelCase names used by the JSON
        representation. The ``id`` key and unknown keys are dropped.
        """
        normalized = {}
        for name, value in definition.items():
            attribute = _EXTERNAL_NAMES.get(name, name)
            if attribute in _DEFINITION_ATTRIBUTES:
                normalized[attribute] = value
        return normalized

    @classmethod
    def from_definition(cls, definition: Union[Mapping[str, Any], "Field"], field_id: str) -> "Field":
        """Build a field from a definition, assigning ``field_id``.

        Any id carried by the definition is discarded.
        """
        if isinstance(definition, Field):
            return replace(definition, id=field_id)

        attributes = cls.normalize_definition(definition)
        attributes.setdefault("name", "")
        attributes.setdefault("key", "")
        return cls(id=field_id, **attributes)

    def merged(self, changes: Mapping[str, Any]) -> "Field":
        """Return a copy with ``changes`` applied and the id preserved."""
        return replace(self, **self.normalize_definition(changes))

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the external camelCase representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "key": self.key,
            "type": self.type.value,
            "required": self.required,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.is_primary:
            data["isPrimary"] = True
        return data

    def definition(self) -> dict[str, Any]:
        """Return the attributes without the id, suitable for resubmission."""
        data = asdict(self)
        del data["id"]
        data["type"] = self.type.value
        return data
