"""LanguageTool HTTP API client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

import requests
from pydantic import ValidationError

from cnxcheck.errors import GrammarCheckError
from cnxcheck.providers.base import GrammarChecker
from cnxcheck.types import CheckResponse

logger = logging.getLogger(__name__)


def _default_host() -> str:
    """Get default LanguageTool host from environment or use localhost."""
    return os.environ.get("LANGUAGETOOL_HOST", "http://localhost:8011").rstrip("/")


@dataclass
class LanguageToolClient(GrammarChecker):
    """HTTP client for a LanguageTool server's /v2/check endpoint."""

    host: str = ""
    language: str = "en"
    timeout_sec: int = 600

    def __post_init__(self) -> None:
        """Initialize host from environment if not provided."""
        if not self.host:
            self.host = _default_host()
        self.host = self.host.rstrip("/")

    def check(self, *, text: str, disabled_rules: Iterable[str] = ()) -> CheckResponse:
        """Check ``text`` and return the reported matches."""
        data = {"language": self.language, "text": text}
        rules = sorted(set(disabled_rules))
        if rules:
            data["disabledRules"] = ",".join(rules)

        url = f"{self.host}/v2/check"
        logger.debug("POST %s chars=%d disabled=%s", url, len(text), rules)
        try:
            r = requests.post(url, data=data, timeout=self.timeout_sec)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            raise GrammarCheckError(f"grammar check request failed: {e}") from e
        except ValueError as e:
            raise GrammarCheckError(f"grammar check returned non-JSON body: {e}") from e

        try:
            return CheckResponse.model_validate(payload)
        except ValidationError as e:
            raise GrammarCheckError(f"unexpected grammar check response: {e}") from e
