"""Domain models for notice documents and their archive manifest."""

from dataclasses import dataclass
from enum import IntEnum


class NoteStatus(IntEnum):
    """Status flag of a note."""

    NORMAL = 0
    IMPORTANT = 1


@dataclass(frozen=True)
class Attachment:
    """A named binary payload stored next to a note."""

    name: str
    data: bytes


@dataclass(frozen=True)
class Note:
    """A leaf node with text content and attachments."""

    title: str
    content: str = ""
    status: int = NoteStatus.NORMAL
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True)
class Branch:
    """A container node with ordered children."""

    title: str
    children: tuple["DocumentNode", ...] = ()


DocumentNode = Branch | Note


@dataclass
class ManifestRecord:
    """Serialized counterpart of one node, as stored in the archive manifest.

    ``children`` being present (even empty) marks a branch; ``filename`` is the
    collision-resolved name chosen at export time.
    """

    title: str
    filename: str
    status: int | None = None
    children: list["ManifestRecord"] | None = None
    attachments: list[str] | None = None

    @property
    def is_branch(self) -> bool:
        return self.children is not None
