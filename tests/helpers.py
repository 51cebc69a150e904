"""Test doubles and builders shared across test modules."""

from __future__ import annotations

from typing import Callable, Iterable

from cnxcheck.doctree import Node
from cnxcheck.types import CheckResponse, GrammarMatch


def make_match(
    offset: int,
    length: int,
    rule_id: str,
    *,
    issue_type: str = "grammar",
    message: str = "Possible problem",
) -> GrammarMatch:
    """Build a match the way LanguageTool reports it."""
    return GrammarMatch.model_validate(
        {
            "offset": offset,
            "length": length,
            "message": message,
            "rule": {"id": rule_id, "issueType": issue_type},
        }
    )


class FakeChecker:
    """Grammar checker double recording every submitted text."""

    def __init__(self, responder: Callable[[str], list[GrammarMatch]] | None = None):
        self.responder = responder or (lambda text: [])
        self.calls: list[tuple[str, frozenset[str]]] = []

    def check(self, *, text: str, disabled_rules: Iterable[str] = ()) -> CheckResponse:
        self.calls.append((text, frozenset(disabled_rules)))
        return CheckResponse(matches=self.responder(text))

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.calls]


def find(root: Node, tag: str) -> Node:
    return next(n for n in root.iter() if n.tag == tag)
