"""Grammar-check prose blocks and turn surviving matches into issues."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

from cnxcheck.blocks import annotate, locate_offset, prepare_block, utf16_to_index
from cnxcheck.doctree import Node, find_first, load_document
from cnxcheck.providers.base import GrammarChecker
from cnxcheck.segmenter import ProseBlock, segment
from cnxcheck.tag_rules import DEFAULT_TAG_RULES, TagRules
from cnxcheck.types import GrammarMatch, Issue

logger = logging.getLogger(__name__)


def document_title(root: Node) -> str:
    title = find_first(root, "title")
    return title.text_content().strip() if title is not None else ""


def is_suppressed(match: GrammarMatch, located: Node | None, rules: TagRules) -> bool:
    """
    True if the node holding the match suppresses its rule.

    Only selectors matching the located node itself count here; rules
    inherited from ancestors were already sent with the request.
    """
    if located is None:
        return False
    return match.rule.id in rules.own_suppressions(located)


def check_block(
    block: ProseBlock,
    checker: GrammarChecker,
    *,
    rules: TagRules = DEFAULT_TAG_RULES,
    title: str = "",
    file: str = "",
) -> list[Issue]:
    """Submit one prose block and return the issues that survive filtering."""
    text = prepare_block(block.node)
    if not text:
        return []

    response = checker.check(text=text, disabled_rules=block.suppressions)

    issues: list[Issue] = []
    for match in response.matches:
        start = utf16_to_index(text, match.offset)
        end = utf16_to_index(text, match.offset + match.length)
        located = locate_offset(block.node, start)
        if is_suppressed(match, located, rules):
            logger.debug("suppressed %s at offset %d", match.rule.id, match.offset)
            continue
        issues.append(
            Issue(
                title=title,
                issue_type=match.rule.issue_type,
                message=match.message,
                context=annotate(text, start, end - start),
                rule_id=match.rule.id,
                file=file,
                node_path=(located or block.node).path(),
            )
        )
    return issues


@dataclass
class DocumentLinter:
    """Runs segmentation and checking over whole documents, one at a time."""

    checker: GrammarChecker
    rules: TagRules = DEFAULT_TAG_RULES
    on_issue: Callable[[Issue], None] | None = None
    n_blocks: int = field(default=0, init=False)
    n_issues: int = field(default=0, init=False)

    def lint_tree(self, root: Node, *, file: str = "") -> Iterator[Issue]:
        title = document_title(root)
        for block in segment(root, self.rules):
            self.n_blocks += 1
            for issue in check_block(block, self.checker, rules=self.rules, title=title, file=file):
                self.n_issues += 1
                yield issue

    def lint_file(self, path: str) -> int:
        """Lint one file, passing each issue to ``on_issue``; returns the issue count.

        Raises DocumentLoadError before any output if the file cannot be loaded.
        """
        root = load_document(path)
        count = 0
        for issue in self.lint_tree(root, file=path):
            count += 1
            if self.on_issue:
                self.on_issue(issue)
        return count
