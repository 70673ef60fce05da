"""Walk a document tree and write it into an archive."""

from typing import assert_never

from loguru import logger

from notice_archive.config import BODY_SUFFIX, BRANCH_PREFIX, INDEX_JSON, NOTE_PREFIX
from notice_archive.core.manifest import encode_manifest
from notice_archive.core.paths import PathAllocator, is_safe_entry_name
from notice_archive.errors import InvalidDocument
from notice_archive.models.node import Attachment, Branch, DocumentNode, ManifestRecord, Note
from notice_archive.protocols import ArchiveProtocol


def _check_attachments(note: Note, body_name: str) -> None:
    seen: set[str] = set()
    for attachment in note.attachments:
        name = attachment.name
        if not is_safe_entry_name(name):
            msg = f"Note {note.title!r}: bad attachment name {name!r}"
            raise InvalidDocument(msg)
        if name in seen:
            msg = f"Note {note.title!r}: duplicate attachment name {name!r}"
            raise InvalidDocument(msg)
        if name == body_name:
            msg = f"Note {note.title!r}: attachment {name!r} clashes with the note body file"
            raise InvalidDocument(msg)
        seen.add(name)


def _write_attachments(
    archive: ArchiveProtocol, directory: str, attachments: tuple[Attachment, ...]
) -> list[str]:
    names: list[str] = []
    for attachment in attachments:
        archive.write_entry(f"{directory}/{attachment.name}", attachment.data)
        names.append(attachment.name)
    return names


def _write_node(
    archive: ArchiveProtocol,
    allocator: PathAllocator,
    parent_prefix: str,
    node: DocumentNode,
) -> ManifestRecord:
    """Write one node (and, for branches, its subtree). Returns its manifest record."""
    match node:
        case Branch():
            path = allocator.allocate(parent_prefix, BRANCH_PREFIX, node.title)
            children = [
                _write_node(archive, allocator, path.directory + "/", child)
                for child in node.children
            ]
            return ManifestRecord(title=node.title, filename=path.filename, children=children)
        case Note():
            path = allocator.allocate(parent_prefix, NOTE_PREFIX, node.title)
            body_name = path.filename + BODY_SUFFIX
            _check_attachments(node, body_name)
            # ../note_<filename>/<filename>.md
            archive.write_entry_text(f"{path.directory}/{body_name}", node.content)
            names = _write_attachments(archive, path.directory, node.attachments)
            logger.debug("Wrote note {!r} ({} attachments)", path.directory, len(names))
            return ManifestRecord(
                title=node.title,
                filename=path.filename,
                status=node.status,
                attachments=names,
            )
        case _:
            assert_never(node)


def serialize_tree(
    archive: ArchiveProtocol,
    root: Branch,
    *,
    allocator: PathAllocator | None = None,
) -> ManifestRecord:
    """Write every node of the tree to the archive, then the manifest.

    The walk is pre-order with children in their original order, so the same
    tree always gets the same layout in a fresh archive. A new allocator is
    made for each call unless one is passed in.

    Args:
        archive: Destination archive. Must not hold an earlier export.
        root: Root branch of the document.
        allocator: Path allocator owned by this call.

    Returns:
        The root manifest record, as written to the manifest entry.

    Raises:
        InvalidDocument: The root is not a branch, or a note has bad attachments.
    """
    if not isinstance(root, Branch):
        msg = f"Document root must be a branch, got {type(root).__name__}"
        raise InvalidDocument(msg)
    if allocator is None:
        allocator = PathAllocator()

    record = _write_node(archive, allocator, "", root)
    archive.write_entry_text(INDEX_JSON, encode_manifest(record))
    logger.info("Exported {!r}: {} directories", root.title, len(allocator))
    return record
