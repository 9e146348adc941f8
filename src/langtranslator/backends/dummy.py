"""Offline client for testing: answers with a gtx-shaped payload tagged [XX]."""

from __future__ import annotations

import json

from langtranslator.backends.base import TranslationClient
from langtranslator.core.errors import ErrorKind, TranslationError


class DummyClient(TranslationClient):
    """Test client that prefixes the text with the target language tag.

    Example: "Hello" → payload decoding to "[ES] Hello".
    Texts containing ``fail_marker`` raise NETWORK_ERROR instead.
    """

    def __init__(self, fail_marker: str | None = None) -> None:
        self._fail_marker = fail_marker
        self.calls: list[tuple[str, str, str]] = []

    def translate(self, text: str, source_code: str, target_code: str) -> str:
        self.calls.append((text, source_code, target_code))
        if self._fail_marker and self._fail_marker in text:
            raise TranslationError(ErrorKind.NETWORK_ERROR, "Network error: simulated failure")
        tag = f"[{target_code.upper()}]"
        return json.dumps([[[f"{tag} {text}", text, None, None, 1]], None, source_code])
