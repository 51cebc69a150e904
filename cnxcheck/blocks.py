"""Flatten prose blocks to text and map text offsets back to nodes."""

from __future__ import annotations

import re

from cnxcheck.doctree import Node

_INDENT_RE = re.compile(r"\n\s+")


def fold_whitespace(text: str) -> str:
    """
    Collapse a newline followed by whitespace into a bare newline.

    Source files indent multi-line prose; the indentation is not part of the
    text. Applying this twice gives the same result as applying it once.
    """
    return _INDENT_RE.sub("\n", text)


def replace_newline_markers(node: Node) -> None:
    """Replace ``<newline/>`` elements with literal newline text."""
    for marker in [n for n in node.iter() if n.tag == "newline" and n is not node]:
        marker.replace_with(Node.text_node("\n"))


def prepare_block(node: Node) -> str:
    """
    Normalize a block in place and return its flattened, stripped text.

    Offsets reported against the returned text can be resolved with
    ``locate_offset`` on the same node afterwards.
    """
    if not node.is_text:
        replace_newline_markers(node)
        node.normalize()

    for n in node.iter():
        if n.is_text:
            n.data = fold_whitespace(n.data)

    return node.text_content().strip()


def locate_offset(node: Node, offset: int) -> Node | None:
    """
    Find the element owning the character at ``offset`` of the block text.

    Offsets are counted against the left-stripped concatenation of the text
    nodes under ``node``. Returns None when the offset lies past the text.
    """
    buf = ""
    for n in node.iter():
        if not n.is_text:
            continue
        buf += n.data
        if len(buf.lstrip()) > offset:
            return n.parent
    return None


def annotate(text: str, offset: int, length: int) -> str:
    """Wrap ``text[offset:offset + length]`` in square brackets."""
    end = offset + length
    return f"{text[:offset]}[{text[offset:end]}]{text[end:]}"


def utf16_to_index(text: str, units: int) -> int:
    """
    Convert a UTF-16 code unit offset into ``text`` to a code point index.

    LanguageTool counts offsets in UTF-16 units, so every character outside
    the BMP occupies two of them.
    """
    if text.isascii():
        return min(units, len(text))
    count = 0
    for i, ch in enumerate(text):
        if count >= units:
            return i
        count += 2 if ord(ch) > 0xFFFF else 1
    return len(text)
