"""CSV and JSON import/export for the store."""

from cmsbase.infrastructure.codec.csv_codec import (
    ImportResult,
    escape_cell,
    export_collection_csv,
    import_collection_csv,
    import_csv_as_collection,
)
from cmsbase.infrastructure.codec.csv_reader import CSVRowReader, read_records
from cmsbase.infrastructure.codec.exceptions import CodecError, ImportFormatError
from cmsbase.infrastructure.codec.json_bundle import (
    RestoreResult,
    dump_bundle,
    export_bundle,
    parse_bundle,
    restore_bundle,
)

__all__ = [
    "CSVRowReader",
    "CodecError",
    "ImportFormatError",
    "ImportResult",
    "RestoreResult",
    "dump_bundle",
    "escape_cell",
    "export_bundle",
    "export_collection_csv",
    "import_collection_csv",
    "import_csv_as_collection",
    "parse_bundle",
    "read_records",
    "restore_bundle",
]
