"""Ollama HTTP API client."""

from __future__ import annotations

import base64
import io
import json
import os
from dataclasses import dataclass
from typing import Any, Iterator

import requests
from PIL import Image

from cnxcheck.errors import ModelServiceError


def _default_host() -> str:
    """Get default Ollama host from environment or use localhost."""
    return os.environ.get("OLLAMA_HOST", "http://localhost:11434").rstrip("/")


def _img_to_b64_png(img: Image.Image) -> str:
    """Convert PIL Image to base64-encoded PNG string."""
    buf = io.BytesIO()
    img.convert("RGB").save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


@dataclass
class OllamaClient:
    """HTTP client for Ollama API."""

    host: str = ""
    timeout_sec: int = 600

    def __post_init__(self) -> None:
        """Initialize host from environment if not provided."""
        if not self.host:
            self.host = _default_host()
        self.host = self.host.rstrip("/")

    def generate_stream(
        self,
        *,
        model: str,
        prompt: str,
        images: list[Image.Image] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Iterator[dict[str, Any]]:
        """
        Stream /api/generate chunks as they arrive.

        Each yielded dict is one line of the newline-delimited JSON response;
        iteration stops after the chunk marked ``done``.
        """
        payload: dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": True,
        }
        if options:
            payload["options"] = options
        if images:
            payload["images"] = [_img_to_b64_png(im) for im in images]

        try:
            with requests.post(
                f"{self.host}/api/generate", json=payload, stream=True, timeout=self.timeout_sec
            ) as r:
                r.raise_for_status()
                for line in r.iter_lines():
                    if not line:
                        continue
                    try:
                        chunk = json.loads(line)
                    except ValueError as e:
                        raise ModelServiceError(f"malformed stream line: {line[:200]!r}") from e
                    if chunk.get("error"):
                        raise ModelServiceError(f"ollama error: {chunk['error']}")
                    yield chunk
                    if chunk.get("done"):
                        return
        except requests.RequestException as e:
            raise ModelServiceError(f"ollama request failed: {e}") from e
