"""Owned node tree for XML documents.

lxml keeps character data in ``text``/``tail`` attributes, which makes offset
accounting awkward. Documents are therefore converted into a plain tree where
character data lives in dedicated text nodes, each element owns its children,
and every node keeps a back-reference to its parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from lxml import etree

from cnxcheck.errors import DocumentLoadError

TEXT_TAG = "#text"


@dataclass(eq=False)
class Node:
    """An element, or a text node when ``tag == "#text"`` (not a legal XML name)."""

    tag: str
    id: str | None = None
    data: str = ""
    parent: "Node | None" = field(default=None, repr=False)
    children: list["Node"] = field(default_factory=list, repr=False)

    @classmethod
    def text_node(cls, data: str, parent: "Node | None" = None) -> "Node":
        return cls(tag=TEXT_TAG, data=data, parent=parent)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_TAG

    def append(self, child: "Node") -> "Node":
        child.parent = self
        self.children.append(child)
        return child

    def iter(self) -> Iterator["Node"]:
        """Pre-order traversal, including this node."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_tag(self, tag: str) -> Iterator["Node"]:
        return (n for n in self.iter() if n.tag == tag)

    def ancestors(self) -> Iterator["Node"]:
        """Parents from the closest one up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def text_content(self) -> str:
        if self.is_text:
            return self.data
        return "".join(n.data for n in self.iter() if n.is_text)

    def set_text(self, data: str) -> None:
        """Replace all children with a single text node."""
        self.children = []
        if data:
            self.append(Node.text_node(data))

    def detach(self) -> None:
        """Remove this node from its parent's children.

        The parent reference is kept so ancestry-based lookups (selectors,
        node paths) still see where the node came from.
        """
        if self.parent is not None and self in self.parent.children:
            self.parent.children.remove(self)

    def replace_with(self, other: "Node") -> None:
        parent = self.parent
        if parent is None:
            raise ValueError("cannot replace a root node")
        idx = parent.children.index(self)
        other.parent = parent
        parent.children[idx] = other
        self.parent = None

    def normalize(self) -> None:
        """Merge adjacent text nodes and drop empty ones, recursively."""
        merged: list[Node] = []
        for child in self.children:
            if child.is_text:
                if not child.data:
                    continue
                if merged and merged[-1].is_text:
                    merged[-1].data += child.data
                    continue
            else:
                child.normalize()
            merged.append(child)
        self.children = merged

    def path(self) -> str:
        """Readable ancestor chain, root first: ``document > content > para#p1``."""
        chain = [self, *self.ancestors()]
        return " > ".join(n.label for n in reversed(chain))

    @property
    def label(self) -> str:
        return f"{self.tag}#{self.id}" if self.id else self.tag


def find_first(root: Node, tag: str) -> Node | None:
    return next(root.iter_tag(tag), None)


def _local_name(el: etree._Element) -> str:
    return etree.QName(el).localname


def from_element(el: etree._Element, parent: Node | None = None) -> Node:
    """Convert an lxml element (and its subtree) into a Node tree."""
    node = Node(tag=_local_name(el), id=el.get("id"), parent=parent)
    if el.text:
        node.append(Node.text_node(el.text))
    for child in el:
        # Entities left unresolved by the parser carry no element of their own
        if isinstance(child.tag, str):
            node.append(from_element(child, node))
        if child.tail:
            node.append(Node.text_node(child.tail))
    return node


def apply_substitutions(root: Node) -> None:
    """Replace cross-reference and math markup with neutral placeholders."""
    for link in list(root.iter_tag("link")):
        link.set_text("LINK")
    # Collected first: replacing while iterating would skip siblings
    for math in list(root.iter_tag("math")):
        if math.parent is None:
            math.set_text("MATH")
        else:
            math.replace_with(Node.text_node("MATH"))
    root.normalize()


def parse_document(source: bytes | str) -> Node:
    """Parse XML bytes into a Node tree with placeholders applied."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    parser = etree.XMLParser(remove_comments=True, remove_pis=True)
    try:
        root_el = etree.fromstring(source, parser=parser)
    except etree.XMLSyntaxError as e:
        raise DocumentLoadError(f"malformed XML: {e}") from e
    root = from_element(root_el)
    apply_substitutions(root)
    return root


def load_document(path: str) -> Node:
    """Read and parse a document from disk."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise DocumentLoadError(f"cannot read file: {e}", path=path) from e
    try:
        return parse_document(data)
    except DocumentLoadError as e:
        raise DocumentLoadError(e.message, path=path) from e
