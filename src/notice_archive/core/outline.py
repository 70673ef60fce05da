"""Render document trees as indented outlines."""

import io

from notice_archive.models.node import Branch, DocumentNode, Note, NoteStatus


def _write_node(
    out: io.StringIO, node: DocumentNode, depth: int, max_depth: int | None
) -> None:
    indent = "    " * depth
    match node:
        case Branch():
            out.write(f"{indent}- {node.title}/\n")
            if max_depth is not None and depth >= max_depth:
                if node.children:
                    noun = "child" if len(node.children) == 1 else "children"
                    out.write(f"{indent}    - ... ({len(node.children)} more {noun})\n")
                return
            for child in node.children:
                _write_node(out, child, depth + 1, max_depth)
        case Note():
            marker = "[!] " if node.status == NoteStatus.IMPORTANT else ""
            out.write(f"{indent}- {marker}{node.title}\n")
            for attachment in node.attachments:
                out.write(f"{indent}  @ {attachment.name} ({len(attachment.data)} bytes)\n")


def render_outline(root: DocumentNode, *, max_depth: int | None = None) -> str:
    """Render a node and its descendants as an indented bullet list.

    Args:
        root: Node to start from.
        max_depth: Max levels below root to include (None = unlimited).

    Returns:
        Outline text. Branch titles end with "/", important notes get "[!]" and
        attachments are listed under their note.
    """
    out = io.StringIO()
    _write_node(out, root, 0, max_depth)
    return out.getvalue()
