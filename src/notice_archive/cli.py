"""CLI for notice archives (show, pack, unpack)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from notice_archive.api import export_document, import_document
from notice_archive.config import DEFAULT_COMPRESS_LEVEL
from notice_archive.core.archive import open_archive
from notice_archive.core.filesystem import read_tree_from_directory, write_tree_to_directory
from notice_archive.core.importer import read_manifest
from notice_archive.core.manifest import record_to_data
from notice_archive.core.outline import render_outline
from notice_archive.errors import NoticeArchiveError
from notice_archive.logging_config import configure_logging

app = typer.Typer(help="Notice archive: inspect, pack and unpack zip-with-index documents.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _require_archive(archive: Path) -> None:
    if not archive.is_file():
        logger.error("Archive not found: {}", archive)
        raise typer.Exit(1)


@app.command()
def show(
    archive: Path = typer.Argument(..., help="Archive to inspect"),
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Print the manifest as JSON"),
) -> None:
    """Print the document outline of an archive."""
    _require_archive(archive)
    try:
        if output_json:
            with open_archive(archive) as zf:
                record = read_manifest(zf)
            typer.echo(json.dumps(record_to_data(record), indent=2, ensure_ascii=False))
        else:
            root = import_document(archive)
            typer.echo(render_outline(root, max_depth=max_depth), nl=False)
    except NoticeArchiveError as e:
        logger.error("Cannot read {}: {}", archive, e)
        raise typer.Exit(1) from e


@app.command()
def unpack(
    archive: Path = typer.Argument(..., help="Archive to unpack"),
    dest: Path = typer.Argument(..., help="Empty or missing destination directory"),
) -> None:
    """Write the notes of an archive to a directory as markdown files."""
    _require_archive(archive)
    try:
        root = import_document(archive)
        count = write_tree_to_directory(root, dest)
    except (NoticeArchiveError, OSError) as e:
        logger.error("Cannot unpack {}: {}", archive, e)
        raise typer.Exit(1) from e
    typer.echo(f"Unpacked {count} nodes to {dest}")


@app.command()
def pack(
    source: Path = typer.Argument(..., help="Directory with markdown notes"),
    archive: Path = typer.Argument(..., help="Archive to create"),
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Root title (default: directory name)"),
    ] = None,
    level: int = typer.Option(
        DEFAULT_COMPRESS_LEVEL, "--level", "-l", min=0, max=9, help="Deflate level"
    ),
) -> None:
    """Pack a directory of markdown notes into an archive."""
    if not source.is_dir():
        logger.error("Source directory not found: {}", source)
        raise typer.Exit(1)
    try:
        root = read_tree_from_directory(source, title=title)
        export_document(archive, root, compress_level=level)
    except NoticeArchiveError as e:
        # A failed export leaves a half-written zip behind.
        archive.unlink(missing_ok=True)
        logger.error("Cannot pack {}: {}", source, e)
        raise typer.Exit(1) from e
    typer.echo(f"Packed {source} into {archive}")
