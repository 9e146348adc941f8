"""Error taxonomy for translation attempts.

Every error is local to a single translate attempt; none of them is fatal
to the process. Callers branch on ``TranslationError.kind``.
"""

from __future__ import annotations

from enum import Enum

# Maximum number of raw-response characters quoted in decoder errors
RAW_EXCERPT_LIMIT = 200


class ErrorKind(str, Enum):
    """Why a translate attempt failed."""
    EMPTY_INPUT = "empty_input"
    NETWORK_ERROR = "network_error"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    NO_TRANSLATION_FOUND = "no_translation_found"
    EMPTY_TRANSLATION = "empty_translation"


class TranslationError(Exception):
    """A failed translate attempt, tagged with its ErrorKind."""

    def __init__(self, kind: ErrorKind, message: str, raw_excerpt: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.raw_excerpt = raw_excerpt

    def __repr__(self) -> str:
        return f"TranslationError({self.kind.name}, {self.message!r})"

    def with_prefix(self, prefix: str) -> TranslationError:
        """Return a copy whose message starts with ``prefix``, keeping kind and cause."""
        wrapped = TranslationError(self.kind, f"{prefix}{self.message}", self.raw_excerpt)
        wrapped.__cause__ = self
        return wrapped


def excerpt(raw: str, limit: int = RAW_EXCERPT_LIMIT) -> str:
    """Truncate a raw response body for inclusion in error messages."""
    return raw[:limit]
