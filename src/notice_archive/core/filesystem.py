"""Move document trees between archives and plain directories.

Branches map to directories and notes to ``<name>.md`` files; a note's
attachments live in a ``<name>.files/`` directory next to it. Directory
listings have no order, so reading a directory back sorts entries by name.
"""

from pathlib import Path
from typing import assert_never

from loguru import logger

from notice_archive.config import ATTACHMENTS_DIR_SUFFIX, BODY_SUFFIX, NOTE_FILE_SUFFIXES
from notice_archive.core.paths import PathAllocator, is_safe_entry_name
from notice_archive.errors import EncodingFailure, InvalidDocument
from notice_archive.models.node import Attachment, Branch, DocumentNode, Note


def _attachment_path(files_dir: Path, name: str) -> Path:
    """Return where an attachment goes, refusing names that leave files_dir."""
    target = files_dir / name
    if not is_safe_entry_name(name) or target.resolve().parent != files_dir.resolve():
        msg = f"Attachment name escapes {str(files_dir)!r}: {name!r}"
        raise InvalidDocument(msg)
    return target


def _reserve_name(
    allocator: PathAllocator, used: set[str], prefix: str, node: DocumentNode
) -> str:
    """Pick a sibling name whose files do not clash with anything already written."""
    while True:
        name = allocator.allocate(prefix, "", node.title).filename
        match node:
            case Branch():
                taken = [name]
            case Note():
                taken = [name + BODY_SUFFIX, name + ATTACHMENTS_DIR_SUFFIX]
            case _:
                assert_never(node)
        if not used.intersection(taken):
            used.update(taken)
            return name


def _write_children(dest: Path, directory: Path, branch: Branch, allocator: PathAllocator) -> int:
    prefix = str(directory.relative_to(dest)) + "/"
    used: set[str] = set()
    count = 0
    for child in branch.children:
        name = _reserve_name(allocator, used, prefix, child)
        match child:
            case Branch():
                subdir = directory / name
                subdir.mkdir()
                count += 1 + _write_children(dest, subdir, child, allocator)
            case Note():
                (directory / (name + BODY_SUFFIX)).write_text(child.content, encoding="utf-8")
                if child.attachments:
                    files_dir = directory / (name + ATTACHMENTS_DIR_SUFFIX)
                    files_dir.mkdir()
                    for attachment in child.attachments:
                        _attachment_path(files_dir, attachment.name).write_bytes(attachment.data)
                count += 1
            case _:
                assert_never(child)
    return count


def write_tree_to_directory(root: Branch, dest: str | Path) -> int:
    """Write the children of root below dest.

    Args:
        root: Root branch; its own title is not written anywhere.
        dest: Destination directory. Created if missing, must be empty otherwise.

    Returns:
        Number of nodes written.
    """
    dest_path = Path(dest).resolve()
    dest_path.mkdir(parents=True, exist_ok=True)
    if any(dest_path.iterdir()):
        msg = f"Destination directory {str(dest_path)!r} is not empty"
        raise FileExistsError(msg)

    count = _write_children(dest_path, dest_path, root, PathAllocator())
    logger.info("Wrote {} nodes to {}", count, dest_path)
    return count


def _read_text(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"File {str(path)!r} is not valid UTF-8: {e}"
        raise EncodingFailure(msg) from e


def _read_attachments(files_dir: Path) -> tuple[Attachment, ...]:
    if not files_dir.is_dir():
        return ()
    attachments: list[Attachment] = []
    for path in sorted(files_dir.iterdir()):
        if not path.is_file():
            logger.debug("Skipping non-file attachment {}", path)
            continue
        attachments.append(Attachment(name=path.name, data=path.read_bytes()))
    return tuple(attachments)


def _read_branch(directory: Path, title: str) -> Branch:
    entries = sorted(directory.iterdir())
    note_stems = {p.stem for p in entries if p.is_file() and p.suffix in NOTE_FILE_SUFFIXES}

    children: list[DocumentNode] = []
    for path in entries:
        if path.is_dir():
            if (
                path.name.endswith(ATTACHMENTS_DIR_SUFFIX)
                and path.name.removesuffix(ATTACHMENTS_DIR_SUFFIX) in note_stems
            ):
                continue
            children.append(_read_branch(path, path.name))
        elif path.is_file() and path.suffix in NOTE_FILE_SUFFIXES:
            children.append(
                Note(
                    title=path.stem,
                    content=_read_text(path),
                    attachments=_read_attachments(
                        directory / (path.stem + ATTACHMENTS_DIR_SUFFIX)
                    ),
                )
            )
        else:
            logger.debug("Skipping {}", path)
    return Branch(title=title, children=tuple(children))


def read_tree_from_directory(src: str | Path, *, title: str | None = None) -> Branch:
    """Read a directory into a document tree.

    Args:
        src: Source directory.
        title: Title for the root branch. Defaults to the directory name.
    """
    src_path = Path(src)
    if not src_path.is_dir():
        msg = f"Source directory {str(src_path)!r} not found"
        raise FileNotFoundError(msg)
    return _read_branch(src_path, title if title is not None else src_path.resolve().name)
