"""Command-line interface for CMSBase.

Every command works on a freshly seeded in-memory store, so commands
that import data report what the store looks like afterwards rather
than persisting anything.
"""

import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import click

from cmsbase.core.config import Settings, get_settings
from cmsbase.core.logging import configure_logging, get_logger
from cmsbase.domain.services.collection_validator import CollectionValidator
from cmsbase.infrastructure.codec import (
    ImportFormatError,
    dump_bundle,
    export_collection_csv,
    import_collection_csv,
    import_csv_as_collection,
    restore_bundle,
)
from cmsbase.infrastructure.store import CMSStore

logger = get_logger(__name__)


def _store(ctx: click.Context) -> CMSStore:
    return CMSStore.seeded(settings=ctx.obj["settings"])


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


def _write_output(text: str, output: Optional[str]) -> None:
    if output is None:
        click.echo(text)
        return
    Path(output).write_text(text, encoding="utf-8")
    click.echo(f"Wrote {output}", err=True)


@click.group()
@click.version_option(version="0.1.0", prog_name="CMSBase")
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug mode",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides CMSBASE_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_level: Optional[str]) -> None:
    """CMSBase - in-memory content store with CSV and JSON import/export."""
    overrides: dict[str, Any] = {}
    if debug:
        overrides["debug"] = True
        overrides["log_level"] = "DEBUG"
    if log_level:
        overrides["log_level"] = log_level

    settings: Settings = get_settings().model_copy(update=overrides)
    configure_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Print aggregate item and collection counts as JSON."""
    _echo_json(_store(ctx).get_cms_stats().to_dict())


@cli.command()
@click.pass_context
def collections(ctx: click.Context) -> None:
    """List collections with their field and item counts."""
    store = _store(ctx)
    all_collections = store.get_collections()
    for collection in all_collections:
        click.echo(
            f"{collection.id:<24} {collection.slug:<24} "
            f"fields={len(collection.fields):<4} items={collection.item_count}"
        )

    slugs = [c.slug for c in all_collections]
    for index, collection in enumerate(all_collections):
        others = slugs[:index] + slugs[index + 1 :]
        for problem in CollectionValidator.validate(
            collection.name, collection.slug, collection.fields, others
        ):
            logger.warning(
                "Collection definition has a problem",
                collection_id=collection.id,
                problem_field=problem.field,
                code=problem.code,
            )


@cli.command("export-json")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout")
@click.pass_context
def export_json(ctx: click.Context, output: Optional[str]) -> None:
    """Export every collection and item as a JSON bundle."""
    _write_output(dump_bundle(_store(ctx)), output)


@cli.command("export-csv")
@click.argument("collection_id")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout")
@click.pass_context
def export_csv(ctx: click.Context, collection_id: str, output: Optional[str]) -> None:
    """Export one collection as CSV."""
    text = export_collection_csv(_store(ctx), collection_id)
    if text is None:
        click.echo(f"Error: collection '{collection_id}' not found", err=True)
        raise SystemExit(1)
    _write_output(text, output)


@cli.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--into", "into", default=None, help="Import CSV rows into this existing collection")
@click.option(
    "--coerce",
    is_flag=True,
    default=False,
    help="Convert CSV cells by field type (infers types for a new collection)",
)
@click.pass_context
def import_file(ctx: click.Context, file: str, into: Optional[str], coerce: bool) -> None:
    """Import a CSV or JSON bundle file and print the result.

    A .json file is restored as a bundle. A CSV file is imported into the
    collection given by --into, or becomes a new collection named after
    the file.
    """
    store = _store(ctx)
    path = Path(file)
    text = path.read_text(encoding="utf-8")

    try:
        if path.suffix.lower() == ".json":
            result = restore_bundle(store, text)
        elif into is not None:
            result = import_collection_csv(store, into, text, coerce=coerce)
            if result is None:
                click.echo(f"Error: collection '{into}' not found", err=True)
                raise SystemExit(1)
        else:
            result = import_csv_as_collection(store, path.name, text, infer_types=coerce)
    except ImportFormatError as e:
        click.echo(f"Error: {e.message} ({e.reason})", err=True)
        logger.error("Import failed", file=file, reason=e.reason)
        raise SystemExit(1)

    _echo_json({"result": result.to_dict(), "stats": store.get_cms_stats().to_dict()})


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display CMSBase configuration."""
    settings = ctx.obj["settings"]

    click.echo(f"""
CMSBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Store:
  Item Limit:   {settings.item_limit}
  ID Length:    {settings.id_length}
  Seeded:       {settings.seed_on_startup}

Import:
  Coerce CSV:   {settings.csv_import_coerce}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `cmsbase` command is run
    or when using `python -m cmsbase`.
    """
    cli()


if __name__ == "__main__":
    main()
