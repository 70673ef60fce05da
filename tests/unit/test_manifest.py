"""Tests for the JSON manifest codec."""

import json

import pytest

from notice_archive.core.manifest import decode_manifest, encode_manifest
from notice_archive.errors import MalformedManifest
from notice_archive.models.node import ManifestRecord, NoteStatus

MANIFEST = {
    "title": "Root",
    "filename": "Root",
    "children": [
        {"title": "Draft", "filename": "Draft", "status": 1, "attachments": [{"name": "a.png"}]},
        {"title": "Folder", "filename": "Folder", "children": []},
        {"title": "Draft", "filename": "Draft_(1)"},
    ],
}


def test_encode_maps_fields_to_json() -> None:
    record = ManifestRecord(
        title="Root",
        filename="Root",
        children=[
            ManifestRecord(
                title="Note", filename="Note", status=NoteStatus.IMPORTANT, attachments=["x.bin"]
            )
        ],
    )

    data = json.loads(encode_manifest(record))

    assert data == {
        "title": "Root",
        "filename": "Root",
        "children": [
            {
                "title": "Note",
                "filename": "Note",
                "status": 1,
                "attachments": [{"name": "x.bin"}],
            }
        ],
    }


def test_encode_omits_absent_optional_fields() -> None:
    data = json.loads(encode_manifest(ManifestRecord(title="T", filename="T")))

    assert data == {"title": "T", "filename": "T"}


def test_encode_keeps_non_ascii_readable() -> None:
    text = encode_manifest(ManifestRecord(title="Заметка", filename="Заметка"))

    assert "Заметка" in text


def test_decode_builds_record_tree() -> None:
    root = decode_manifest(json.dumps(MANIFEST))

    assert root.title == "Root"
    assert root.is_branch
    assert root.children is not None
    draft, folder, draft2 = root.children
    assert draft.status == NoteStatus.IMPORTANT
    assert draft.attachments == ["a.png"]
    assert draft.children is None
    assert folder.children == []
    assert folder.is_branch
    assert draft2.filename == "Draft_(1)"


def test_decode_defaults_status_to_normal() -> None:
    record = decode_manifest('{"title": "T", "filename": "T"}')

    assert record.status == NoteStatus.NORMAL
    assert record.attachments is None
    assert record.children is None


def test_decode_keeps_unknown_status_values() -> None:
    record = decode_manifest('{"title": "T", "filename": "T", "status": 7}')

    assert record.status == 7


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json",
        "[1, 2]",
        '{"filename": "T"}',
        '{"title": "T"}',
        '{"title": 5, "filename": "T"}',
        '{"title": "T", "filename": "T", "status": "high"}',
        '{"title": "T", "filename": "T", "status": true}',
        '{"title": "T", "filename": "T", "children": {}}',
        '{"title": "T", "filename": "T", "children": [{"title": "C"}]}',
        '{"title": "T", "filename": "T", "attachments": ["a.png"]}',
        '{"title": "T", "filename": "T", "attachments": [{"file": "a.png"}]}',
    ],
)
def test_decode_rejects_malformed_manifests(text: str) -> None:
    with pytest.raises(MalformedManifest):
        decode_manifest(text)


def test_decode_error_names_the_missing_field() -> None:
    with pytest.raises(MalformedManifest, match="'filename'"):
        decode_manifest('{"title": "T", "children": []}')
