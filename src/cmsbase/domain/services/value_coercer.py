"""Value coercion service for imported and newly created item data.

The store keeps values untyped. This service turns text (typically CSV
cells) into the scalar a field's type suggests, infers a field type from
a column of sample values, and builds the default data of a new item.
Coercion is best-effort: a value that does not parse is returned as-is.
"""

import re
from collections.abc import Iterable, Sequence
from typing import Any, Callable

from cmsbase.domain.entities.collection import utc_now
from cmsbase.domain.entities.field import Field, FieldType, Scalar

NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$")

# Email and URL patterns (simplified but effective)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

TRUE_LITERALS = frozenset({"true", "yes", "1", "on"})
FALSE_LITERALS = frozenset({"false", "no", "0", "off"})


class ValueCoercer:
    """Best-effort conversion between text and typed scalars."""

    @classmethod
    def coerce_number(cls, value: Any) -> Scalar:
        """Parse an int or float literal.

        Examples:
            >>> ValueCoercer.coerce_number("5")
            5
            >>> ValueCoercer.coerce_number("9.5")
            9.5
            >>> ValueCoercer.coerce_number("n/a")
            'n/a'
        """
        if not isinstance(value, str):
            return value
        text = value.strip()
        if not text:
            return None
        if INTEGER_PATTERN.match(text):
            return int(text)
        if NUMBER_PATTERN.match(text):
            return float(text)
        return value

    @classmethod
    def coerce_boolean(cls, value: Any) -> Scalar:
        """Parse true/false, yes/no, on/off and 1/0, case-insensitively."""
        if not isinstance(value, str):
            return value
        text = value.strip().lower()
        if not text:
            return None
        if text in TRUE_LITERALS:
            return True
        if text in FALSE_LITERALS:
            return False
        return value

    @classmethod
    def coerce_text(cls, value: Any) -> Scalar:
        return value

    @classmethod
    def coerce(cls, value: Any, field_type: FieldType) -> Scalar:
        """Coerce ``value`` according to ``field_type``.

        Only number and boolean fields change representation; every other
        type is stored as text.
        """
        coercers: dict[FieldType, Callable[[Any], Scalar]] = {
            FieldType.NUMBER: cls.coerce_number,
            FieldType.BOOLEAN: cls.coerce_boolean,
        }
        return coercers.get(field_type, cls.coerce_text)(value)

    @classmethod
    def infer_field_type(cls, values: Iterable[str]) -> FieldType:
        """Infer the narrowest field type matching every non-empty value.

        Examples:
            >>> ValueCoercer.infer_field_type(["1", "2.5", ""])
            <FieldType.NUMBER: 'number'>
            >>> ValueCoercer.infer_field_type(["yes", "No"])
            <FieldType.BOOLEAN: 'boolean'>
        """
        samples = [v.strip() for v in values if v is not None and v.strip()]
        if not samples:
            return FieldType.TEXT

        checks: list[tuple[FieldType, Callable[[str], bool]]] = [
            (FieldType.NUMBER, lambda v: bool(NUMBER_PATTERN.match(v))),
            (FieldType.BOOLEAN, lambda v: v.lower() in TRUE_LITERALS | FALSE_LITERALS),
            (FieldType.DATE, lambda v: bool(DATE_PATTERN.match(v))),
            (FieldType.URL, lambda v: bool(URL_PATTERN.match(v))),
            (FieldType.EMAIL, lambda v: bool(EMAIL_PATTERN.match(v))),
        ]
        for field_type, matches in checks:
            if all(matches(v) for v in samples):
                return field_type

        return FieldType.TEXT

    @classmethod
    def default_for(cls, field: Field) -> Scalar:
        """Default value of ``field`` for a freshly added item."""
        if field.default_value is not None:
            return field.default_value
        if field.type == FieldType.BOOLEAN:
            return False
        if field.type == FieldType.NUMBER:
            return 0
        if field.type == FieldType.DATE:
            return utc_now()
        return ""

    @classmethod
    def defaults_for(cls, fields: Sequence[Field]) -> dict[str, Scalar]:
        return {f.key: cls.default_for(f) for f in fields}
