"""Identifier generator service.

Generates short opaque base-36 identifiers with a semantic prefix
(``col_``, ``f_``, ``item_``). Identifiers are drawn from a process-wide
pseudo-random source: they are neither cryptographic nor collision proof,
which is acceptable for a single-process, low-volume store.
"""

import random
import re

from cmsbase.core.config import get_settings


class IdGenerator:
    """Generator for prefixed base-36 identifiers.

    Example IDs: col_k3j9x0a1b2c3d, f_0z8y7x6w5v4u3, item_a1b2c3d4e5f6g
    """

    ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

    COLLECTION_PREFIX = "col_"
    FIELD_PREFIX = "f_"
    ITEM_PREFIX = "item_"

    PATTERN = re.compile(r"^(?:[a-z]+_)?[0-9a-z]+$")

    _random = random.Random()

    @classmethod
    def generate(cls, prefix: str = "", length: int | None = None) -> str:
        """Generate a new identifier.

        Args:
            prefix: Semantic tag prepended to the random part.
            length: Number of random characters. Defaults to the
                ``id_length`` setting.

        Returns:
            The prefixed identifier.
        """
        if length is None:
            length = get_settings().id_length
        body = "".join(cls._random.choice(cls.ALPHABET) for _ in range(length))
        return f"{prefix}{body}"

    @classmethod
    def collection_id(cls, length: int | None = None) -> str:
        return cls.generate(cls.COLLECTION_PREFIX, length)

    @classmethod
    def field_id(cls, length: int | None = None) -> str:
        return cls.generate(cls.FIELD_PREFIX, length)

    @classmethod
    def item_id(cls, length: int | None = None) -> str:
        return cls.generate(cls.ITEM_PREFIX, length)

    @classmethod
    def seed(cls, value: int | str | None) -> None:
        """Reseed the shared random source (deterministic test runs)."""
        cls._random.seed(value)

    @classmethod
    def validate(cls, identifier: str) -> bool:
        """Check that an identifier has the generated shape.

        Examples:
            >>> IdGenerator.validate("col_abc123")
            True
            >>> IdGenerator.validate("Col-1")
            False
        """
        if not isinstance(identifier, str):
            return False
        return bool(cls.PATTERN.match(identifier))
