"""Collection validation service for schema and field definitions.

Validation here is advisory: the store accepts any schema, and callers
such as the importer and the CLI use these checks to report problems
(duplicate keys, slug collisions, unknown types) before or after
creating a collection.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from cmsbase.domain.entities.field import Field, FieldType
from cmsbase.domain.services.slug_generator import SlugGenerator

FieldLike = Union[Field, Mapping[str, Any]]


@dataclass
class CollectionValidationError:
    """A single collection validation error."""

    field: str
    message: str
    code: str


class CollectionValidator:
    """Validator for collection definitions.

    Validates collection names, slugs and field configurations.
    """

    MAX_NAME_LENGTH = 128

    @classmethod
    def validate_name(cls, name: str) -> list[CollectionValidationError]:
        """Validate a collection name.

        Args:
            name: The collection name to validate.

        Returns:
            List of validation errors (empty if valid).
        """
        if not name or not name.strip():
            return [
                CollectionValidationError(
                    field="name",
                    message="Collection name is required",
                    code="name_required",
                )
            ]

        if len(name) > cls.MAX_NAME_LENGTH:
            return [
                CollectionValidationError(
                    field="name",
                    message=f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            ]

        return []

    @classmethod
    def validate_slug(
        cls, slug: str, existing_slugs: Iterable[str] = ()
    ) -> list[CollectionValidationError]:
        """Validate slug format and uniqueness against ``existing_slugs``."""
        errors = [
            CollectionValidationError(field=e.field, message=e.message, code=e.code)
            for e in SlugGenerator.validate(slug)
        ]

        if slug and slug in set(existing_slugs):
            errors.append(
                CollectionValidationError(
                    field="slug",
                    message=f"Slug '{slug}' is already used by another collection",
                    code="slug_not_unique",
                )
            )

        return errors

    @classmethod
    def validate_field_type(cls, field_type: Any, field_index: int) -> list[CollectionValidationError]:
        """Validate a field type against the closed FieldType set."""
        if isinstance(field_type, FieldType):
            return []

        valid_types = [t.value for t in FieldType]
        if not isinstance(field_type, str) or field_type.lower() not in valid_types:
            return [
                CollectionValidationError(
                    field=f"fields[{field_index}].type",
                    message=f"Invalid field type '{field_type}'. Must be one of: {', '.join(valid_types)}",
                    code="field_type_invalid",
                )
            ]

        return []

    @classmethod
    def validate_fields(cls, fields: Sequence[FieldLike]) -> list[CollectionValidationError]:
        """Validate a field list.

        Reports missing names or keys, unknown types, duplicate keys and
        more than one primary field.
        """
        errors: list[CollectionValidationError] = []
        seen_keys: dict[str, int] = {}
        primary_count = 0

        for index, definition in enumerate(fields):
            if isinstance(definition, Field):
                attributes = definition.definition()
            else:
                attributes = Field.normalize_definition(definition)

            if not attributes.get("name"):
                errors.append(
                    CollectionValidationError(
                        field=f"fields[{index}].name",
                        message="Field name is required",
                        code="field_name_required",
                    )
                )

            key = attributes.get("key") or ""
            if not key:
                errors.append(
                    CollectionValidationError(
                        field=f"fields[{index}].key",
                        message="Field key is required",
                        code="field_key_required",
                    )
                )
            elif key in seen_keys:
                errors.append(
                    CollectionValidationError(
                        field=f"fields[{index}].key",
                        message=f"Duplicate field key '{key}' (also used by fields[{seen_keys[key]}])",
                        code="field_key_duplicate",
                    )
                )
            else:
                seen_keys[key] = index

            errors.extend(cls.validate_field_type(attributes.get("type", "text"), index))

            if attributes.get("is_primary"):
                primary_count += 1

        if primary_count > 1:
            errors.append(
                CollectionValidationError(
                    field="fields",
                    message="At most one field can be marked primary",
                    code="multiple_primary_fields",
                )
            )

        return errors

    @classmethod
    def validate(
        cls,
        name: str,
        slug: str,
        fields: Sequence[FieldLike],
        existing_slugs: Iterable[str] = (),
    ) -> list[CollectionValidationError]:
        """Validate a complete collection definition.

        Args:
            name: Collection name.
            slug: Collection slug.
            fields: Field definitions.
            existing_slugs: Slugs already in use by other collections.

        Returns:
            List of all validation errors found.
        """
        errors = cls.validate_name(name)
        errors.extend(cls.validate_slug(slug, existing_slugs))
        errors.extend(cls.validate_fields(fields))
        return errors
