"""
cnxcheck - Grammar linting for CNXML documents, plus a small VLM image client.

The linter splits each XML document into atomic prose blocks, sends them to a
LanguageTool server and reports matches as CSV. The image client streams an
answer about a picture from a local Ollama model.

Modules:
    blocks: Block flattening and offset-to-node lookup
    checker: Block checking and per-document linting
    cli: Command-line interfaces (cnxcheck-lint, cnxcheck-image)
    doctree: Node tree built from parsed XML
    report: CSV output
    segmenter: Prose block segmentation
    tag_rules: Tag classification and rule suppressions
    walker: Document discovery
"""

from cnxcheck import (
    blocks,
    checker,
    doctree,
    report,
    segmenter,
    tag_rules,
    walker,
)

__version__ = "0.1.0"

__all__ = [
    "blocks",
    "checker",
    "doctree",
    "report",
    "segmenter",
    "tag_rules",
    "walker",
]
