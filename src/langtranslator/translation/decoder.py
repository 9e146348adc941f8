"""Decoder for the translate_a/single nested-array payload.

With ``dt=t`` the endpoint answers with a JSON array shaped like::

    [[["Hola", "Hello", null, null, 1], ...], null, "en"]

Element 0 holds one entry per translated segment; the segment text is the
first item of each entry. Element 2, when present, is the detected source
language.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from langtranslator.core.errors import ErrorKind, TranslationError, excerpt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedResponse:
    """Plain translated text extracted from a raw response."""
    text: str
    detected_source: str | None = None


def _malformed(reason: str, raw: str) -> TranslationError:
    snippet = excerpt(raw)
    return TranslationError(
        ErrorKind.MALFORMED_RESPONSE,
        f"Failed to parse translation response: {reason}. Response: {snippet}",
        raw_excerpt=snippet,
    )


def _segment_text(item: Any) -> str | None:
    """Return the translated text of one segment entry, or None if it is unusable."""
    if not isinstance(item, list) or not item:
        return None
    text = item[0]
    if not isinstance(text, str):
        return None
    return text


def decode_response(raw: str) -> DecodedResponse:
    """Parse a raw response body into translated text.

    Segment entries that do not have the expected shape are skipped, so a
    partially understood payload still yields whatever text it carries.

    Raises:
        TranslationError: MALFORMED_RESPONSE on parse or shape errors,
            NO_TRANSLATION_FOUND when a well-formed payload holds no text.
    """
    cleaned = raw.strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise _malformed(f"JSON parsing error: {e.msg}", raw) from e

    if not isinstance(payload, list):
        raise _malformed(f"top-level value is {type(payload).__name__}, not an array", raw)
    if not payload:
        raise _malformed("empty JSON array", raw)

    segments = payload[0]
    if not isinstance(segments, list):
        raise _malformed(
            f"first element is {type(segments).__name__}, not an array", raw,
        )

    parts: list[str] = []
    skipped = 0
    for item in segments:
        text = _segment_text(item)
        if text is None:
            skipped += 1
            continue
        if text.strip():
            parts.append(text)

    if skipped:
        logger.debug("Skipped %d unparseable segment(s) in response", skipped)

    result = "".join(parts).strip()
    if not result:
        snippet = excerpt(raw)
        raise TranslationError(
            ErrorKind.NO_TRANSLATION_FOUND,
            f"No translation found in response. Raw response: {snippet}",
            raw_excerpt=snippet,
        )

    detected = payload[2] if len(payload) > 2 and isinstance(payload[2], str) else None
    return DecodedResponse(text=result, detected_source=detected)
