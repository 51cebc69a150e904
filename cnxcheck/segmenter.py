"""Split a document tree into atomic prose blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from cnxcheck.doctree import Node
from cnxcheck.tag_rules import TagClass, TagRules


@dataclass(frozen=True)
class ProseBlock:
    """A subtree submitted to the grammar checker as one unit of text."""

    node: Node
    suppressions: frozenset[str]


def _has_direct_text(node: Node) -> bool:
    return any(c.is_text and c.data.strip() for c in node.children)


def extract_first_descendants(
    node: Node,
    rules: TagRules,
    suppressions: frozenset[str] = frozenset(),
) -> list[tuple[Node, frozenset[str]]]:
    """Outermost extract-first nodes below ``node``, in document order.

    Each node is paired with the suppressions accumulated on the way down to
    it from ``node`` (whose own set is ``suppressions``). Nested extract-first
    nodes stay inside their outermost ancestor and are picked up when that
    ancestor is segmented.
    """
    found: list[tuple[Node, frozenset[str]]] = []
    stack = [(c, suppressions) for c in reversed(node.children)]
    while stack:
        child, inherited = stack.pop()
        if rules.classify(child.tag) is TagClass.EXTRACT_FIRST:
            found.append((child, inherited))
            continue
        own = rules.suppressions_for(child, inherited)
        stack.extend((c, own) for c in reversed(child.children))
    return found


def segment(
    node: Node,
    rules: TagRules,
    inherited: frozenset[str] = frozenset(),
) -> Iterator[ProseBlock]:
    """Yield the prose blocks of ``node`` with their suppression sets.

    Extract-first descendants are detached from the tree and segmented on
    their own before the remaining content of ``node`` is looked at. The
    generator is lazy: detachment of a subtree happens when iteration reaches
    it, so callers may check each block before the next one is produced.
    """
    suppressions = rules.suppressions_for(node, inherited)

    extracted = extract_first_descendants(node, rules, suppressions)
    for sub, _ in extracted:
        sub.detach()
    for sub, sub_inherited in extracted:
        yield from segment(sub, rules, sub_inherited)

    if rules.classify(node.tag) is TagClass.ATOMIC or _has_direct_text(node):
        yield ProseBlock(node=node, suppressions=suppressions)
        return

    for child in list(node.children):
        yield from segment(child, rules, suppressions)
