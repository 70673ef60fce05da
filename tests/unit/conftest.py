"""Shared test fixtures."""

import pytest

from notice_archive.models.node import Attachment, Branch, Note, NoteStatus

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01"


def make_sample_tree() -> Branch:
    """A small document exercising every node feature."""
    return Branch(
        title="Notebook",
        children=(
            Note(title="Readme", content="# Hello\n\nFirst note."),
            Branch(
                title="Work",
                children=(
                    Note(
                        title="Plan",
                        content="- ship it",
                        status=NoteStatus.IMPORTANT,
                        attachments=(
                            Attachment(name="img.png", data=PNG_BYTES),
                            Attachment(name="data.bin", data=bytes(range(256))),
                        ),
                    ),
                    Branch(title="Empty"),
                ),
            ),
            Note(title="Заметка", content="Привет, мир"),
        ),
    )


@pytest.fixture
def sample_tree() -> Branch:
    return make_sample_tree()
