"""Rebuild a document tree from an archive."""

from loguru import logger

from notice_archive.config import BODY_SUFFIX, BRANCH_PREFIX, INDEX_JSON, NOTE_PREFIX
from notice_archive.core.manifest import decode_manifest
from notice_archive.errors import ArchiveIOFailure, InvalidFormat, MalformedManifest
from notice_archive.models.node import (
    Attachment,
    Branch,
    DocumentNode,
    ManifestRecord,
    Note,
    NoteStatus,
)
from notice_archive.protocols import ArchiveProtocol


def _require(archive: ArchiveProtocol, path: str) -> None:
    """Raise if an entry the manifest refers to is missing."""
    if not archive.has_entry(path):
        msg = f"Archive entry {path!r} is referenced by the manifest but missing"
        raise ArchiveIOFailure(msg)


def _read_node(archive: ArchiveProtocol, parent_prefix: str, record: ManifestRecord) -> DocumentNode:
    if record.is_branch:
        return _read_branch(archive, parent_prefix, record)
    return _read_note(archive, parent_prefix, record)


def _read_branch(archive: ArchiveProtocol, parent_prefix: str, record: ManifestRecord) -> Branch:
    directory = parent_prefix + BRANCH_PREFIX + record.filename
    return Branch(
        title=record.title,
        children=tuple(
            _read_node(archive, directory + "/", child) for child in record.children or ()
        ),
    )


def _read_note(archive: ArchiveProtocol, parent_prefix: str, record: ManifestRecord) -> Note:
    directory = parent_prefix + NOTE_PREFIX + record.filename
    body_path = f"{directory}/{record.filename}{BODY_SUFFIX}"
    _require(archive, body_path)
    content = archive.read_entry_text(body_path)

    attachments: list[Attachment] = []
    for name in record.attachments or ():
        attachment_path = f"{directory}/{name}"
        _require(archive, attachment_path)
        attachments.append(Attachment(name=name, data=archive.read_entry(attachment_path)))

    return Note(
        title=record.title,
        content=content,
        status=record.status if record.status is not None else NoteStatus.NORMAL,
        attachments=tuple(attachments),
    )


def read_manifest(archive: ArchiveProtocol) -> ManifestRecord:
    """Read and decode the manifest entry.

    Raises:
        InvalidFormat: The archive has no manifest, or it is empty.
        MalformedManifest: The manifest cannot be decoded.
    """
    text = archive.read_entry_text(INDEX_JSON) if archive.has_entry(INDEX_JSON) else ""
    if not text.strip():
        msg = f"Invalid file format: archive has no {INDEX_JSON}"
        raise InvalidFormat(msg)
    return decode_manifest(text)


def deserialize_tree(archive: ArchiveProtocol) -> Branch:
    """Read the manifest and every entry it references into a new tree.

    Raises:
        InvalidFormat: The archive has no manifest.
        MalformedManifest: The manifest is broken or its root is not a branch.
        ArchiveIOFailure: A note body or attachment listed in the manifest is missing.
    """
    record = read_manifest(archive)
    if not record.is_branch:
        msg = f"Manifest root {record.title!r} must be a branch"
        raise MalformedManifest(msg)

    root = _read_branch(archive, "", record)
    logger.info("Imported {!r} ({} top-level nodes)", root.title, len(root.children))
    return root
