"""Tag classification and per-tag rule suppressions for the document linter."""

from __future__ import annotations

from enum import Enum
from functools import cached_property
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from cnxcheck.doctree import TEXT_TAG, Node


class TagClass(str, Enum):
    ATOMIC = "atomic"  # whole subtree is one prose block
    EXTRACT_FIRST = "extract-first"  # detached and checked on its own
    CONTAINER = "container"  # recurse into children


class Suppression(BaseModel):
    """Grammar rules to ignore inside nodes matching ``selector``.

    The selector is a comma-separated list of alternatives. Each alternative is
    a space-separated tag path with descendant semantics: ``"list item"``
    matches an ``item`` that has a ``list`` somewhere among its ancestors.
    """

    model_config = ConfigDict(frozen=True)

    selector: str
    rules: tuple[str, ...]

    @field_validator("selector")
    @classmethod
    def _non_empty_selector(cls, v: str) -> str:
        if not any(alt.split() for alt in v.split(",")):
            raise ValueError("selector must name at least one tag")
        return v

    @cached_property
    def paths(self) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(alt.split()) for alt in self.selector.split(",") if alt.split())

    def matches(self, node: Node) -> bool:
        return any(_matches_path(node, p) for p in self.paths)


def _matches_path(node: Node, path: tuple[str, ...]) -> bool:
    if node.tag != path[-1]:
        return False
    pending = list(path[:-1])
    for ancestor in node.ancestors():
        if not pending:
            break
        if ancestor.tag == pending[-1]:
            pending.pop()
    return not pending


DEFAULT_SUPPRESSIONS: tuple[Suppression, ...] = (
    Suppression(
        selector="glossary term, glossary meaning, problem item, list item, table entry",
        rules=("UPPERCASE_SENTENCE_START",),
    ),
    Suppression(
        selector="emphasis",
        rules=(
            "SENTENCE_WHITESPACE",
            "EN_A_VS_AN",
            "THE_SENT_END",
            "THE_PUNCT",
            "I_LOWERCASE",
        ),
    ),
    Suppression(selector="footnote", rules=("SENTENCE_WHITESPACE",)),
)


class TagRules(BaseModel):
    """Immutable linter configuration, built once and shared by reference."""

    model_config = ConfigDict(frozen=True)

    atomic_tags: frozenset[str] = frozenset({TEXT_TAG, "para"})
    extract_first_tags: frozenset[str] = frozenset({"list", "item", "figure", "table"})
    suppressions: tuple[Suppression, ...] = DEFAULT_SUPPRESSIONS

    @model_validator(mode="after")
    def _disjoint_classes(self) -> "TagRules":
        overlap = self.atomic_tags & self.extract_first_tags
        if overlap:
            raise ValueError(f"tags cannot be both atomic and extract-first: {sorted(overlap)}")
        return self

    def classify(self, tag: str) -> TagClass:
        if tag in self.atomic_tags:
            return TagClass.ATOMIC
        if tag in self.extract_first_tags:
            return TagClass.EXTRACT_FIRST
        return TagClass.CONTAINER

    def own_suppressions(self, node: Node) -> frozenset[str]:
        """Rules suppressed by selectors matching ``node`` itself."""
        rules: set[str] = set()
        for s in self.suppressions:
            if s.matches(node):
                rules.update(s.rules)
        return frozenset(rules)

    def suppressions_for(self, node: Node, inherited: frozenset[str] = frozenset()) -> frozenset[str]:
        return inherited | self.own_suppressions(node)

    @classmethod
    def from_file(cls, path: str | Path) -> "TagRules":
        """Load rules from a JSON file; omitted keys keep their defaults."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))


DEFAULT_TAG_RULES = TagRules()
