"""Ollama VLM provider for image question answering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterator

from PIL import Image

from cnxcheck.providers.base import VisionLanguageModel
from cnxcheck.providers.ollama.client import OllamaClient

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "What is in this picture?"


@dataclass
class OllamaVLM(VisionLanguageModel):
    """
    Ollama-based Vision Language Model provider.

    Model name can be configured via VLM_MODEL environment variable.

    Usage:
        VLM_MODEL=llava cnxcheck-image photo.jpg "Describe the chart"
        VLM_MODEL=qwen3-vl:30b cnxcheck-image photo.jpg
    """

    model: str = ""  # Will be loaded from env or defaults to llava
    timeout_sec: int = 600
    host: str = ""  # e.g. http://localhost:11434 (defaults from OLLAMA_HOST)
    options: dict | None = None

    def __post_init__(self) -> None:
        """Initialize model from environment variable if not set."""
        if not self.model:
            self.model = os.environ.get("VLM_MODEL", "llava")

    def stream(self, *, prompt: str, image: Image.Image) -> Iterator[str]:
        """Yield response text fragments as the model produces them."""
        client = OllamaClient(host=self.host, timeout_sec=self.timeout_sec)
        n_chunks = 0
        for chunk in client.generate_stream(
            model=self.model, prompt=prompt, images=[image], options=self.options
        ):
            n_chunks += 1
            fragment = chunk.get("response") or ""
            if fragment:
                yield fragment
        logger.debug(f"[OllamaVLM] model={self.model} chunks={n_chunks}")
