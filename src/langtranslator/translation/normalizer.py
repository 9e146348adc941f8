"""Whitespace normalization of user input before translation."""

from __future__ import annotations

import re

from langtranslator.core.errors import ErrorKind, TranslationError

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Trim the text and collapse internal whitespace runs to a single space.

    Raises:
        TranslationError: with kind EMPTY_INPUT when nothing but whitespace remains.
    """
    normalized = _WHITESPACE_RUN.sub(" ", text).strip()
    if not normalized:
        raise TranslationError(ErrorKind.EMPTY_INPUT, "Input text is empty")
    return normalized
