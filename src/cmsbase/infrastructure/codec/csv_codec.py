"""CSV import and export for collections.

Export writes one header row of field names followed by one row per
item. Import maps header cells onto the fields of an existing collection
(case-insensitively, by name or key) or synthesizes a new collection
whose fields are the headers.

Imports create one item per row through the store, so consistency hooks
and user hooks run for every row. There is no rollback: the counts in
the returned ImportResult are authoritative.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Optional

from cmsbase.core.logging import LoggingContext, get_logger
from cmsbase.domain.entities.field import Field, FieldType, Scalar
from cmsbase.domain.services.collection_validator import CollectionValidator
from cmsbase.domain.services.slug_generator import SlugGenerator
from cmsbase.domain.services.value_coercer import ValueCoercer
from cmsbase.infrastructure.codec.csv_reader import DELIMITER, NEWLINE, QUOTE, read_records
from cmsbase.infrastructure.codec.exceptions import ImportFormatError
from cmsbase.infrastructure.store.exceptions import StoreError

logger = get_logger(__name__)

_NEEDS_QUOTING = (DELIMITER, QUOTE, NEWLINE, "\r")


@dataclass
class ImportResult:
    """Outcome of a CSV import.

    Attributes:
        collection_id: Collection the rows were imported into.
        imported_count: Items actually created.
        skipped_count: Data rows dropped because no cell mapped to a field.
        failed_count: Rows whose item creation raised.
        errors: One message per failed row.
    """

    collection_id: str
    imported_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "collectionId": self.collection_id,
            "imported": self.imported_count,
            "skipped": self.skipped_count,
            "failed": self.failed_count,
            "errors": list(self.errors),
        }


def format_value(value: Scalar) -> str:
    """String form of a stored value: None is empty, booleans are lowercase."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def escape_cell(value: Scalar) -> str:
    """Quote a cell if it holds a comma, quote or newline, doubling inner quotes.

    Examples:
        >>> escape_cell('say "hi" now')
        '"say ""hi"" now"'
        >>> escape_cell(5)
        '5'
    """
    text = format_value(value)
    if any(char in text for char in _NEEDS_QUOTING):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def export_collection_csv(store: Any, collection_id: str) -> Optional[str]:
    """Render a collection and its items as CSV text.

    Returns:
        The CSV text (rows joined with ``\\n``), or None if the collection
        is not found.
    """
    collection = store.get_collection(collection_id)
    if collection is None:
        logger.warning("Collection not found for CSV export", collection_id=collection_id)
        return None

    items = store.get_items(collection_id)
    lines = [DELIMITER.join(escape_cell(f.name) for f in collection.fields)]
    for item in items:
        lines.append(DELIMITER.join(escape_cell(item.data.get(f.key)) for f in collection.fields))

    logger.info(
        "Collection exported as CSV",
        collection_id=collection_id,
        rows=len(items),
        columns=len(collection.fields),
    )
    return NEWLINE.join(lines)


def _split_header(text: str) -> tuple[list[str], list[list[str]]]:
    records = read_records(text)
    if len(records) < 2:
        raise ImportFormatError(
            "CSV file must have a header row and at least one data row",
            reason=ImportFormatError.TOO_FEW_ROWS,
        )
    return records[0], records[1:]


def _match_headers(headers: Sequence[str], fields: Sequence[Field]) -> dict[int, Field]:
    """Map column index to field by case-insensitive name or key."""
    column_map: dict[int, Field] = {}
    for index, header in enumerate(headers):
        wanted = header.lower()
        match = next(
            (f for f in fields if f.name.lower() == wanted or f.key.lower() == wanted),
            None,
        )
        if match is not None:
            column_map[index] = match
    return column_map


def _create_rows(
    store: Any,
    result: ImportResult,
    rows: Sequence[Sequence[str]],
    column_map: Mapping[int, Field],
    coerce: bool,
) -> ImportResult:
    for row_number, row in enumerate(rows, start=2):
        data: dict[str, Scalar] = {}
        for index, cell in enumerate(row):
            target = column_map.get(index)
            if target is not None:
                data[target.key] = ValueCoercer.coerce(cell, target.type) if coerce else cell

        if not data:
            result.skipped_count += 1
            continue

        try:
            store.create_item(result.collection_id, data)
        except StoreError as e:
            result.failed_count += 1
            result.errors.append(f"Row {row_number}: {e}")
            logger.warning("CSV row import failed", row=row_number, error=str(e))
        else:
            result.imported_count += 1

    return result


def import_collection_csv(
    store: Any, collection_id: str, text: str, coerce: Optional[bool] = None
) -> Optional[ImportResult]:
    """Import CSV rows as items of an existing collection.

    Columns whose header matches no field are dropped. Cell values stay
    strings unless ``coerce`` is set.

    Args:
        store: Target store.
        collection_id: Collection to import into.
        text: CSV text with a header row.
        coerce: Convert cells per field type. Defaults to the store's
            ``csv_import_coerce`` setting.

    Returns:
        ImportResult, or None if the collection is not found.

    Raises:
        ImportFormatError: If the text has fewer than two non-blank records.
    """
    collection = store.get_collection(collection_id)
    if collection is None:
        logger.warning("Collection not found for CSV import", collection_id=collection_id)
        return None

    headers, rows = _split_header(text)
    if coerce is None:
        coerce = store.settings.csv_import_coerce

    column_map = _match_headers(headers, collection.fields)
    unmatched = [h for i, h in enumerate(headers) if i not in column_map]
    if unmatched:
        logger.info("CSV columns without matching field dropped", columns=unmatched)

    with LoggingContext(collection_id=collection_id, import_kind="csv"):
        result = _create_rows(store, ImportResult(collection_id), rows, column_map, coerce)
        logger.info(
            "CSV import completed",
            imported=result.imported_count,
            skipped=result.skipped_count,
            failed=result.failed_count,
        )
    return result


def import_csv_as_collection(
    store: Any, filename: str, text: str, infer_types: bool = False
) -> ImportResult:
    """Create a new collection from a CSV file and import its rows.

    The collection is named after the file (extension removed). Every
    header becomes a field whose key is the lowercased header with each
    character outside ``[a-z0-9]`` replaced by ``_``.

    Args:
        store: Target store.
        filename: Name of the imported file.
        text: CSV text with a header row.
        infer_types: Infer each field's type from its column instead of
            using ``text``. Inferred columns are also coerced.

    Raises:
        ImportFormatError: If the text has fewer than two non-blank records.
    """
    headers, rows = _split_header(text)
    name = PurePath(filename).stem

    definitions = []
    for index, header in enumerate(headers):
        field_type = FieldType.TEXT
        if infer_types:
            field_type = ValueCoercer.infer_field_type(
                row[index] for row in rows if index < len(row)
            )
        definitions.append(
            {
                "name": header,
                "key": SlugGenerator.import_key(header),
                "type": field_type,
                "required": False,
            }
        )

    slug = SlugGenerator.import_slug(name)
    for problem in CollectionValidator.validate(
        name, slug, definitions, (c.slug for c in store.get_collections())
    ):
        logger.warning(
            "Imported collection definition has a problem",
            problem_field=problem.field,
            code=problem.code,
            detail=problem.message,
        )

    collection = store.create_collection(name, slug, definitions)
    column_map = dict(enumerate(collection.fields))

    with LoggingContext(collection_id=collection.id, import_kind="csv"):
        result = _create_rows(store, ImportResult(collection.id), rows, column_map, infer_types)
        logger.info(
            "CSV imported as new collection",
            filename=filename,
            fields=len(collection.fields),
            imported=result.imported_count,
            skipped=result.skipped_count,
            failed=result.failed_count,
        )
    return result
