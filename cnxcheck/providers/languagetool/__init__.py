"""LanguageTool provider for grammar checking."""

from cnxcheck.providers.languagetool.client import LanguageToolClient

__all__ = ["LanguageToolClient"]
