"""Public entry points: export a tree to a zip archive and import it back."""

from pathlib import Path
from typing import BinaryIO

from notice_archive.config import DEFAULT_COMPRESS_LEVEL
from notice_archive.core.archive import open_archive
from notice_archive.core.exporter import serialize_tree
from notice_archive.core.importer import deserialize_tree
from notice_archive.models.node import Branch


def export_document(
    target: str | Path | BinaryIO,
    root: Branch,
    *,
    compress_level: int = DEFAULT_COMPRESS_LEVEL,
) -> None:
    """Export the whole tree to a new zip archive at target.

    A failed export leaves target in an unusable state; discard it.
    """
    with open_archive(target, "w", compress_level=compress_level) as archive:
        serialize_tree(archive, root)


def import_document(source: str | Path | BinaryIO) -> Branch:
    """Import a tree from a zip archive written by export_document."""
    with open_archive(source, "r") as archive:
        return deserialize_tree(archive)


class ZipWithIndexFormat:
    """Zip archive with an ``index.json`` manifest.

    Implements ExportStrategy, and can read back what it writes.
    """

    def __init__(self, *, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> None:
        self.compress_level = compress_level

    def export(self, target: str | Path | BinaryIO, root: Branch) -> None:
        export_document(target, root, compress_level=self.compress_level)

    def import_document(self, source: str | Path | BinaryIO) -> Branch:
        return import_document(source)
