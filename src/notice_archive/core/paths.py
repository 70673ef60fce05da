"""Collision-free path allocation inside the flat archive namespace."""

import re
from dataclasses import dataclass

from loguru import logger

from notice_archive.config import MAX_FILENAME_LENGTH, PLACEHOLDER_FILENAME

# Characters not allowed in zip entry names or on common filesystems.
_ILLEGAL_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]+')


def sanitize_filename(raw: str) -> str:
    """Turn an arbitrary title into a filesystem-safe, non-empty token.

    Runs of illegal characters become a single underscore. Leading and trailing
    underscores, dots, spaces and dashes are stripped so the token can never be
    "." or ".." and never hides as a dotfile. Applying this to its own output
    returns the output unchanged.
    """
    name = _ILLEGAL_CHARS.sub("_", raw)[:MAX_FILENAME_LENGTH]
    return name.strip("_. -") or PLACEHOLDER_FILENAME


@dataclass(frozen=True)
class AllocatedPath:
    """Result of an allocation.

    Attributes:
        directory: Full archive path of the node directory (no trailing slash).
        filename: The collision-resolved name segment, without the kind prefix.
    """

    directory: str
    filename: str


class PathAllocator:
    """Hand out unique directory paths for one export call.

    Appends ``_(1)``, ``_(2)``, ... to the sanitized name until the directory
    path does not match anything allocated before by this instance.
    """

    def __init__(self) -> None:
        self._allocated: set[str] = set()

    def __contains__(self, path: str) -> bool:
        return path in self._allocated

    def __len__(self) -> int:
        return len(self._allocated)

    def allocate(self, parent_prefix: str, kind_prefix: str, raw_name: str) -> AllocatedPath:
        """Allocate a unique directory below parent_prefix.

        Args:
            parent_prefix: Parent directory path, empty or ending with "/".
            kind_prefix: Token marking the node kind, e.g. "branch_" or "note_".
            raw_name: Unsanitized name, usually the node title.

        Returns:
            The allocated directory and the filename segment it was built from.
        """
        base = sanitize_filename(raw_name)
        filename = base
        directory = parent_prefix + kind_prefix + filename
        counter = 0
        while directory in self._allocated:
            counter += 1
            filename = f"{base}_({counter})"
            directory = parent_prefix + kind_prefix + filename

        if counter:
            logger.debug("Name collision for {!r}, using {!r}", raw_name, directory)
        self._allocated.add(directory)
        return AllocatedPath(directory=directory, filename=filename)


def is_safe_entry_name(name: str) -> bool:
    """Check that name is usable as a single path segment.

    Zip truncates names at NUL, and "/" or ".." would reach outside the
    note's own directory.
    """
    return bool(name) and "/" not in name and "\x00" not in name and name not in (".", "..")
