"""Protocols for dependency injection in the archive codec."""

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from notice_archive.models.node import Branch


@runtime_checkable
class ArchiveProtocol(Protocol):
    """Entry-addressable archive used by the serializer and deserializer."""

    def has_entry(self, path: str) -> bool:
        """Return True if the archive holds an entry at path."""
        ...

    def read_entry(self, path: str) -> bytes:
        """Read an entry, returning empty bytes if it is absent."""
        ...

    def read_entry_text(self, path: str) -> str:
        """Read an entry as UTF-8 text."""
        ...

    def write_entry(self, path: str, data: bytes) -> None:
        """Add or overwrite an entry."""
        ...

    def write_entry_text(self, path: str, text: str) -> None:
        """Add or overwrite an entry with UTF-8 text."""
        ...


@runtime_checkable
class ExportStrategy(Protocol):
    """Protocol for document formats that can export a whole tree."""

    def export(self, target: str | Path | BinaryIO, root: Branch) -> None:
        """Write the tree rooted at root to target."""
        ...
