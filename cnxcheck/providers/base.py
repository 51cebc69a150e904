"""Base protocols for the grammar checker and VLM services."""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol

from PIL import Image

from cnxcheck.types import CheckResponse


class GrammarChecker(Protocol):
    """
    Minimal grammar-check interface:
    - text + rule ids to skip -> matches with offsets into that text
    """

    def check(self, *, text: str, disabled_rules: Iterable[str] = ()) -> CheckResponse: ...


class VisionLanguageModel(Protocol):
    def stream(self, *, prompt: str, image: Image.Image) -> Iterator[str]: ...
