"""JSON bundle export and restore.

The bundle is a snapshot of the whole store. Restoring a bundle never
overwrites existing data: every bundled collection is re-created as a
new collection (suffixed name, timestamped slug, fresh field ids) and
the bundled items are re-created under the new collection ids.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from cmsbase.core.logging import LoggingContext, get_logger
from cmsbase.domain.services.collection_validator import CollectionValidator
from cmsbase.domain.services.slug_generator import SlugGenerator
from cmsbase.infrastructure.codec.exceptions import ImportFormatError
from cmsbase.infrastructure.codec.schemas import BundleSchema
from cmsbase.infrastructure.store.exceptions import StoreError

logger = get_logger(__name__)


@dataclass
class RestoreResult:
    """Outcome of a bundle restore.

    Attributes:
        collections_restored: Collections created.
        items_restored: Items created.
        items_skipped: Bundled items whose collection was not in the bundle.
        items_failed: Items whose creation raised.
        id_map: Bundled collection id to new collection id.
        errors: One message per failed item.
    """

    collections_restored: int = 0
    items_restored: int = 0
    items_skipped: int = 0
    items_failed: int = 0
    id_map: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "collections": self.collections_restored,
            "items": self.items_restored,
            "skipped": self.items_skipped,
            "failed": self.items_failed,
            "idMap": dict(self.id_map),
            "errors": list(self.errors),
        }


def export_bundle(store: Any) -> dict[str, Any]:
    """Snapshot every collection and item, items grouped per collection."""
    collections = store.get_collections()
    items = [item.to_dict() for c in collections for item in store.get_items(c.id)]
    return {
        "collections": [c.to_dict() for c in collections],
        "items": items,
    }


def dump_bundle(store: Any, indent: int = 2) -> str:
    bundle = export_bundle(store)
    logger.info(
        "Store exported as JSON bundle",
        collections=len(bundle["collections"]),
        items=len(bundle["items"]),
    )
    return json.dumps(bundle, indent=indent)


def parse_bundle(text: str) -> BundleSchema:
    """Parse and validate bundle text.

    Raises:
        ImportFormatError: If the text is not JSON or not a bundle.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Invalid JSON: {e}", reason=ImportFormatError.INVALID_JSON) from e

    try:
        return BundleSchema.model_validate(payload)
    except ValidationError as e:
        raise ImportFormatError(
            f"Invalid bundle: {e.error_count()} validation error(s)",
            reason=ImportFormatError.INVALID_BUNDLE,
        ) from e


def _epoch_millis(timestamp: str) -> int:
    moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    return int(moment.timestamp() * 1000)


def restore_bundle(store: Any, text: str) -> RestoreResult:
    """Re-create the collections and items of a bundle.

    Each collection is created with the store's ``restore_name_suffix`` setting
    appended to its name and ``-imported-<epoch millis>`` appended to its
    slug. Original field ids are discarded so the store assigns new ones.
    Items are re-created under the new id of their collection; items of
    collections missing from the bundle are skipped.

    Args:
        store: Target store.
        text: Bundle JSON as produced by ``dump_bundle``.

    Returns:
        RestoreResult with counts and the collection id map.

    Raises:
        ImportFormatError: If the text is not a valid bundle. The store is
            left untouched.
    """
    bundle = parse_bundle(text)
    suffix = store.settings.restore_name_suffix
    stamp = _epoch_millis(store.clock())
    taken_slugs = [c.slug for c in store.get_collections()]
    result = RestoreResult()

    for bundled in bundle.collections:
        definitions = [f.definition() for f in bundled.fields]
        for problem in CollectionValidator.validate_fields(definitions):
            logger.warning(
                "Restored collection has a field problem",
                source_collection_id=bundled.id,
                problem_field=problem.field,
                code=problem.code,
            )

        slug = SlugGenerator.unique(f"{bundled.slug}-imported-{stamp}", taken_slugs)
        taken_slugs.append(slug)
        collection = store.create_collection(f"{bundled.name}{suffix}", slug, definitions)
        result.id_map[bundled.id] = collection.id
        result.collections_restored += 1

    for bundled_item in bundle.items:
        target_id = result.id_map.get(bundled_item.collection_id)
        if target_id is None:
            result.items_skipped += 1
            continue

        with LoggingContext(collection_id=target_id, import_kind="json"):
            try:
                store.create_item(target_id, bundled_item.data)
            except StoreError as e:
                result.items_failed += 1
                result.errors.append(f"Item {bundled_item.id}: {e}")
                logger.warning("Bundled item restore failed", source_item_id=bundled_item.id, error=str(e))
            else:
                result.items_restored += 1

    logger.info(
        "JSON bundle restored",
        collections=result.collections_restored,
        items=result.items_restored,
        skipped=result.items_skipped,
        failed=result.items_failed,
    )
    return result
