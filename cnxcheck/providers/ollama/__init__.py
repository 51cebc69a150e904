"""Ollama provider for VLM services."""

from cnxcheck.providers.ollama.client import OllamaClient
from cnxcheck.providers.ollama.vlm import OllamaVLM

__all__ = ["OllamaClient", "OllamaVLM"]
