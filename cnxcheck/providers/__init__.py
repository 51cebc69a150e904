"""Providers module for grammar-check and VLM services."""

from cnxcheck.providers.languagetool import LanguageToolClient
from cnxcheck.providers.ollama import OllamaClient, OllamaVLM

__all__ = ["LanguageToolClient", "OllamaClient", "OllamaVLM"]
