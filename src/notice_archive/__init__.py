"""Zip-with-index codec for hierarchical note documents."""

from notice_archive.api import ZipWithIndexFormat, export_document, import_document
from notice_archive.errors import (
    ArchiveIOFailure,
    EncodingFailure,
    InvalidDocument,
    InvalidFormat,
    MalformedManifest,
    NoticeArchiveError,
)
from notice_archive.models.node import Attachment, Branch, DocumentNode, Note, NoteStatus
from notice_archive.protocols import ArchiveProtocol, ExportStrategy

__all__ = [
    "ArchiveIOFailure",
    "ArchiveProtocol",
    "Attachment",
    "Branch",
    "DocumentNode",
    "EncodingFailure",
    "ExportStrategy",
    "InvalidDocument",
    "InvalidFormat",
    "MalformedManifest",
    "Note",
    "NoteStatus",
    "NoticeArchiveError",
    "ZipWithIndexFormat",
    "export_document",
    "import_document",
]
