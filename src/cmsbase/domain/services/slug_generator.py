"""Slug and key generator service.

Derives URL-friendly collection slugs and data keys from human-readable
names. Two flavours exist: the editor flavour collapses whitespace and
drops other characters, the import flavour replaces every character
outside ``[a-z0-9]`` one for one so that distinct CSV headers keep
distinct keys.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class SlugValidationError:
    """Represents a slug validation error.

    Attributes:
        field: The field name (typically 'slug').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class SlugGenerator:
    """Generate and validate slugs and field keys.

    Slug rules:
    - Non-empty
    - Lowercase letters, digits and hyphens only
    """

    VALID_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

    @classmethod
    def generate(cls, text: str) -> str:
        """Generate a slug from a collection name.

        Examples:
            >>> SlugGenerator.generate("Player Reviews")
            'player-reviews'
            >>> SlugGenerator.generate("Cards & Packs")
            'cards--packs'
        """
        slug = re.sub(r"\s+", "-", text.lower())
        return re.sub(r"[^a-z0-9-]", "", slug)

    @classmethod
    def field_key(cls, name: str) -> str:
        """Generate a data key from a field name.

        Examples:
            >>> SlugGenerator.field_key("Overall Rating")
            'overall_rating'
        """
        key = re.sub(r"\s+", "_", name.lower())
        return re.sub(r"[^a-z0-9_]", "", key)

    @classmethod
    def import_key(cls, header: str) -> str:
        """Generate a data key from a CSV header, one character at a time.

        Examples:
            >>> SlugGenerator.import_key("Card Name")
            'card_name'
            >>> SlugGenerator.import_key("Price ($)")
            'price____'
        """
        return re.sub(r"[^a-z0-9]", "_", header.lower())

    @classmethod
    def import_slug(cls, name: str) -> str:
        """Generate a slug from an imported file name.

        Examples:
            >>> SlugGenerator.import_slug("My Players")
            'my-players'
        """
        return re.sub(r"[^a-z0-9]", "-", name.lower())

    @classmethod
    def unique(cls, slug: str, existing: Iterable[str]) -> str:
        """Return ``slug`` or the first ``slug-N`` not in ``existing``."""
        taken = set(existing)
        if slug not in taken:
            return slug
        suffix = 2
        while f"{slug}-{suffix}" in taken:
            suffix += 1
        return f"{slug}-{suffix}"

    @classmethod
    def validate(cls, slug: str) -> list[SlugValidationError]:
        """Validate a slug against the rules.

        Args:
            slug: The slug to validate.

        Returns:
            List of validation errors. Empty list if slug is valid.
        """
        if not slug:
            return [
                SlugValidationError(
                    field="slug",
                    message="Slug is required",
                    code="slug_required",
                )
            ]

        if not cls.VALID_SLUG_PATTERN.match(slug):
            return [
                SlugValidationError(
                    field="slug",
                    message="Slug must contain only lowercase letters, numbers, and hyphens",
                    code="slug_invalid_chars",
                )
            ]

        return []

    @classmethod
    def is_valid(cls, slug: str) -> bool:
        return not cls.validate(slug)
