"""Zip container access: named entries in, named entries out."""

import zipfile
import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Literal

from loguru import logger

from notice_archive.config import COMPRESSION, DEFAULT_COMPRESS_LEVEL
from notice_archive.errors import ArchiveIOFailure, EncodingFailure

# Everything zipfile may raise for a broken, truncated or unreadable container.
_CONTAINER_ERRORS = (OSError, zipfile.BadZipFile, zlib.error, EOFError)

ArchiveMode = Literal["r", "w"]


class ZipArchive:
    """Read or write entries of one zip file.

    In write mode entries are kept in memory and only stored on close(), so
    writing the same path twice overwrites it instead of producing a duplicate
    zip member. Nothing written is visible to other readers before close()
    returns.
    """

    def __init__(
        self,
        target: str | Path | BinaryIO,
        mode: ArchiveMode = "r",
        *,
        compress_level: int = DEFAULT_COMPRESS_LEVEL,
    ) -> None:
        if mode not in ("r", "w"):
            msg = f"Unsupported archive mode: {mode!r}"
            raise ValueError(msg)
        self.mode = mode
        self.compress_level = compress_level
        self._name = str(target) if isinstance(target, (str, Path)) else repr(target)
        self._pending: dict[str, bytes] = {}
        self._closed = False
        try:
            if mode == "w":
                self._zip = zipfile.ZipFile(
                    target, "w", compression=COMPRESSION, compresslevel=compress_level
                )
            else:
                self._zip = zipfile.ZipFile(target, "r")
        except _CONTAINER_ERRORS as e:
            msg = f"Cannot open archive {self._name}: {e}"
            raise ArchiveIOFailure(msg) from e
        logger.debug("Opened archive {} (mode {!r})", self._name, mode)

    def has_entry(self, path: str) -> bool:
        if self.mode == "w":
            return path in self._pending
        try:
            self._zip.getinfo(path)
        except KeyError:
            return False
        return True

    def read_entry(self, path: str) -> bytes:
        """Read an entry. Returns empty bytes if the entry does not exist."""
        self._check_open()
        if self.mode == "w":
            return self._pending.get(path, b"")
        if not self.has_entry(path):
            return b""
        try:
            return self._zip.read(path)
        except _CONTAINER_ERRORS as e:
            msg = f"Cannot read {path!r} from {self._name}: {e}"
            raise ArchiveIOFailure(msg) from e

    def read_entry_text(self, path: str) -> str:
        data = self.read_entry(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Entry {path!r} is not valid UTF-8: {e}"
            raise EncodingFailure(msg) from e

    def write_entry(self, path: str, data: bytes) -> None:
        """Add or overwrite an entry. Stored when the archive is closed."""
        self._check_open()
        if self.mode != "w":
            msg = f"Archive {self._name} is opened read-only, cannot write {path!r}"
            raise ArchiveIOFailure(msg)
        if path in self._pending:
            logger.debug("Overwriting entry {!r}", path)
        self._pending[path] = bytes(data)

    def write_entry_text(self, path: str, text: str) -> None:
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as e:
            msg = f"Text for {path!r} cannot be encoded as UTF-8: {e}"
            raise EncodingFailure(msg) from e
        self.write_entry(path, data)

    def close(self) -> None:
        """Flush pending entries and close the container. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            try:
                for path, data in self._pending.items():
                    self._zip.writestr(path, data)
            finally:
                self._zip.close()
        except _CONTAINER_ERRORS as e:
            msg = f"Cannot finalize archive {self._name}: {e}"
            raise ArchiveIOFailure(msg) from e
        if self.mode == "w":
            logger.debug("Wrote {} entries to {}", len(self._pending), self._name)

    def _check_open(self) -> None:
        if self._closed:
            msg = f"Archive {self._name} is already closed"
            raise ArchiveIOFailure(msg)


@contextmanager
def open_archive(
    target: str | Path | BinaryIO,
    mode: ArchiveMode = "r",
    *,
    compress_level: int = DEFAULT_COMPRESS_LEVEL,
) -> Iterator[ZipArchive]:
    """Open an archive for the duration of one import or export.

    The archive is flushed and closed on every exit path, including errors.
    """
    archive = ZipArchive(target, mode, compress_level=compress_level)
    try:
        yield archive
    finally:
        archive.close()
