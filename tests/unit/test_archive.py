"""Tests for ZipArchive, the zip container accessor."""

import io
import zipfile
from pathlib import Path

import pytest

from notice_archive.core.archive import ZipArchive, open_archive
from notice_archive.errors import ArchiveIOFailure, EncodingFailure


def test_written_entries_are_readable_after_close(tmp_path: Path) -> None:
    path = tmp_path / "doc.zip"
    with open_archive(path, "w") as archive:
        archive.write_entry("a/b.bin", b"\x00\x01\x02")
        archive.write_entry_text("a/c.md", "Привет")

    with open_archive(path) as archive:
        assert archive.read_entry("a/b.bin") == b"\x00\x01\x02"
        assert archive.read_entry_text("a/c.md") == "Привет"


def test_entries_use_deflate(tmp_path: Path) -> None:
    path = tmp_path / "doc.zip"
    with open_archive(path, "w") as archive:
        archive.write_entry_text("body.md", "hello " * 100)

    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo("body.md")
    assert info.compress_type == zipfile.ZIP_DEFLATED
    assert info.compress_size < info.file_size


def test_read_missing_entry_returns_empty_bytes(tmp_path: Path) -> None:
    path = tmp_path / "doc.zip"
    with open_archive(path, "w") as archive:
        archive.write_entry("present", b"x")

    with open_archive(path) as archive:
        assert archive.read_entry("missing") == b""
        assert archive.has_entry("present") is True
        assert archive.has_entry("missing") is False


def test_has_entry_tells_empty_from_missing() -> None:
    buf = io.BytesIO()
    with open_archive(buf, "w") as archive:
        archive.write_entry("empty", b"")

    buf.seek(0)
    with open_archive(buf) as archive:
        assert archive.has_entry("empty") is True
        assert archive.read_entry("empty") == b""


def test_writing_twice_overwrites_instead_of_duplicating() -> None:
    buf = io.BytesIO()
    with open_archive(buf, "w") as archive:
        archive.write_entry_text("index.json", "{}")
        archive.write_entry_text("index.json", '{"title": "x"}')

    buf.seek(0)
    with zipfile.ZipFile(buf) as zf:
        assert zf.namelist() == ["index.json"]
        assert zf.read("index.json") == b'{"title": "x"}'


def test_nothing_is_stored_before_close() -> None:
    buf = io.BytesIO()
    archive = ZipArchive(buf, "w")
    archive.write_entry("a", b"data")

    assert buf.getvalue() == b""
    assert archive.read_entry("a") == b"data"

    archive.close()
    assert buf.getvalue() != b""


def test_archive_is_closed_and_flushed_on_error(tmp_path: Path) -> None:
    path = tmp_path / "doc.zip"
    with pytest.raises(RuntimeError, match="boom"), open_archive(path, "w") as archive:
        archive.write_entry("a", b"data")
        raise RuntimeError("boom")

    with zipfile.ZipFile(path) as zf:
        assert zf.read("a") == b"data"


def test_open_missing_file_raises_archive_io_failure(tmp_path: Path) -> None:
    with pytest.raises(ArchiveIOFailure, match="Cannot open archive"):
        ZipArchive(tmp_path / "missing.zip")


def test_open_non_zip_raises_archive_io_failure(tmp_path: Path) -> None:
    path = tmp_path / "not-a.zip"
    path.write_bytes(b"this is not a zip file")

    with pytest.raises(ArchiveIOFailure):
        ZipArchive(path)


def test_read_text_rejects_invalid_utf8() -> None:
    buf = io.BytesIO()
    with open_archive(buf, "w") as archive:
        archive.write_entry("bad.md", b"\xff\xfe\xfa")

    buf.seek(0)
    with open_archive(buf) as archive, pytest.raises(EncodingFailure, match="bad.md"):
        archive.read_entry_text("bad.md")


def test_write_text_rejects_unencodable_text() -> None:
    archive = ZipArchive(io.BytesIO(), "w")

    with pytest.raises(EncodingFailure):
        archive.write_entry_text("bad.md", "\ud800")


def test_write_to_read_only_archive_raises() -> None:
    buf = io.BytesIO()
    with open_archive(buf, "w"):
        pass

    buf.seek(0)
    with open_archive(buf) as archive, pytest.raises(ArchiveIOFailure, match="read-only"):
        archive.write_entry("a", b"x")


def test_use_after_close_raises() -> None:
    archive = ZipArchive(io.BytesIO(), "w")
    archive.close()

    with pytest.raises(ArchiveIOFailure, match="already closed"):
        archive.write_entry("a", b"x")


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported archive mode"):
        ZipArchive(io.BytesIO(), "a")  # type: ignore[arg-type]
