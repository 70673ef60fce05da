"""Encode and decode the JSON index manifest."""

import json
from typing import Any

from notice_archive.errors import MalformedManifest
from notice_archive.models.node import ManifestRecord, NoteStatus

KEY_TITLE = "title"
KEY_FILENAME = "filename"
KEY_STATUS = "status"
KEY_CHILDREN = "children"
KEY_ATTACHMENTS = "attachments"
KEY_ATTACHMENT_NAME = "name"


def record_to_data(record: ManifestRecord) -> dict[str, Any]:
    """Map a record tree onto plain JSON-compatible dicts and lists."""
    data: dict[str, Any] = {KEY_TITLE: record.title, KEY_FILENAME: record.filename}
    if record.status is not None:
        data[KEY_STATUS] = int(record.status)
    if record.children is not None:
        data[KEY_CHILDREN] = [record_to_data(child) for child in record.children]
    if record.attachments is not None:
        data[KEY_ATTACHMENTS] = [{KEY_ATTACHMENT_NAME: name} for name in record.attachments]
    return data


def encode_manifest(record: ManifestRecord) -> str:
    """Serialize the root record to manifest text."""
    return json.dumps(record_to_data(record), ensure_ascii=False)


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    if key not in data:
        msg = f"Manifest record at {where} has no {key!r}"
        raise MalformedManifest(msg)
    value = data[key]
    if not isinstance(value, str):
        msg = f"Manifest record at {where}: {key!r} must be a string, got {value!r}"
        raise MalformedManifest(msg)
    return value


def _require_list(data: dict[str, Any], key: str, where: str) -> list[Any]:
    value = data[key]
    if not isinstance(value, list):
        msg = f"Manifest record at {where}: {key!r} must be a list, got {type(value).__name__}"
        raise MalformedManifest(msg)
    return value


def data_to_record(data: Any, *, where: str = "/") -> ManifestRecord:
    """Build a record tree from parsed JSON data.

    Args:
        data: Parsed JSON object for one record.
        where: Position of the record, used in error messages.

    Raises:
        MalformedManifest: A required field is missing or a field has the wrong type.
    """
    if not isinstance(data, dict):
        msg = f"Manifest record at {where} must be an object, got {type(data).__name__}"
        raise MalformedManifest(msg)

    title = _require_str(data, KEY_TITLE, where)
    filename = _require_str(data, KEY_FILENAME, where)

    status = data.get(KEY_STATUS, NoteStatus.NORMAL)
    # bool is an int subclass, but "status": true is not a status.
    if not isinstance(status, int) or isinstance(status, bool):
        msg = f"Manifest record at {where}: {KEY_STATUS!r} must be an integer, got {status!r}"
        raise MalformedManifest(msg)
    if status in {s.value for s in NoteStatus}:
        status = NoteStatus(status)

    children: list[ManifestRecord] | None = None
    if KEY_CHILDREN in data:
        children = [
            data_to_record(child, where=f"{where}{filename}/")
            for child in _require_list(data, KEY_CHILDREN, where)
        ]

    attachments: list[str] | None = None
    if KEY_ATTACHMENTS in data:
        attachments = []
        for i, item in enumerate(_require_list(data, KEY_ATTACHMENTS, where)):
            if not isinstance(item, dict):
                msg = f"Manifest record at {where}: attachment #{i} must be an object"
                raise MalformedManifest(msg)
            attachments.append(_require_str(item, KEY_ATTACHMENT_NAME, f"{where} attachment #{i}"))

    return ManifestRecord(
        title=title,
        filename=filename,
        status=status,
        children=children,
        attachments=attachments,
    )


def decode_manifest(text: str) -> ManifestRecord:
    """Parse manifest text into the root record.

    Raises:
        MalformedManifest: The text is not JSON or does not describe a record tree.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Manifest is not valid JSON: {e}"
        raise MalformedManifest(msg) from e
    return data_to_record(data)
