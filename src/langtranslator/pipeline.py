"""Translation pipeline: normalize → (chunk) → request → decode → join.

Used by both the CLI (cli.py) and the interactive session (session.py).
Short texts take a single round trip and any failure fails the whole call.
Long texts are split at sentence boundaries; a chunk whose request fails
is dropped and reported in ``TranslationResult.dropped_chunks`` so callers
can tell a partial translation from a complete one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from langtranslator.backends.base import TranslationClient
from langtranslator.core.errors import ErrorKind, TranslationError
from langtranslator.core.languages import map_language_code
from langtranslator.translation.decoder import DecodedResponse, decode_response
from langtranslator.translation.normalizer import normalize_text
from langtranslator.translation.splitter import DEFAULT_MAX_CHUNK_SIZE, split_into_chunks

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "Translation failed: "

# Type alias for progress callback: (phase, current, total, message)
ProgressCallback = Callable[[str, int, int, str], None]


@dataclass(frozen=True)
class TranslationRequest:
    """One outbound request: a single chunk and an endpoint language pair."""
    text: str
    source_code: str
    target_code: str


@dataclass
class TranslationResult:
    """Outcome of one translate call: translated text or a tagged error."""
    translated_text: str = ""
    error: TranslationError | None = None
    chunk_count: int = 0
    dropped_chunks: list[int] = field(default_factory=list)
    detected_source: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def partial(self) -> bool:
        """True when some, but not all, chunks were dropped."""
        return self.ok and bool(self.dropped_chunks)

    @classmethod
    def success(
        cls,
        translated_text: str,
        *,
        chunk_count: int = 1,
        dropped_chunks: list[int] | None = None,
        detected_source: str | None = None,
    ) -> TranslationResult:
        return cls(
            translated_text=translated_text,
            chunk_count=chunk_count,
            dropped_chunks=dropped_chunks or [],
            detected_source=detected_source,
        )

    @classmethod
    def failure(cls, error: TranslationError, *, chunk_count: int = 0) -> TranslationResult:
        return cls(error=error, chunk_count=chunk_count)


class Translator:
    """Orchestrates one translation over a TranslationClient.

    The client is injected and owned by the caller; the translator never
    closes it.
    """

    def __init__(
        self,
        client: TranslationClient,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
    ) -> None:
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        self._client = client
        self._max_chunk_size = max_chunk_size

    @property
    def max_chunk_size(self) -> int:
        return self._max_chunk_size

    def _request(self, request: TranslationRequest) -> DecodedResponse:
        raw = self._client.translate(request.text, request.source_code, request.target_code)
        return decode_response(raw)

    def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        on_progress: ProgressCallback | None = None,
    ) -> TranslationResult:
        """Translate text from source_lang to target_lang.

        Never raises; failures come back as ``TranslationResult.failure``.
        Client and decoder errors are prefixed with "Translation failed: ",
        empty input and empty output are not. Any other exception from the
        client is reported as a network error.
        """
        try:
            normalized = normalize_text(text)
        except TranslationError as e:
            return TranslationResult.failure(e)

        source_code = map_language_code(source_lang)
        target_code = map_language_code(target_lang)

        if len(normalized) <= self._max_chunk_size:
            return self._translate_single(normalized, source_code, target_code, on_progress)
        return self._translate_chunked(normalized, source_code, target_code, on_progress)

    def _translate_single(
        self,
        text: str,
        source_code: str,
        target_code: str,
        on_progress: ProgressCallback | None,
    ) -> TranslationResult:
        if on_progress:
            on_progress("translate", 0, 1, "")
        try:
            decoded = self._request(TranslationRequest(text, source_code, target_code))
        except TranslationError as e:
            logger.info("Translation %s→%s failed: %s", source_code, target_code, e.message)
            return TranslationResult.failure(e.with_prefix(FAILURE_PREFIX), chunk_count=1)
        except Exception as e:
            logger.exception("Translation %s→%s raised unexpectedly", source_code, target_code)
            error = TranslationError(ErrorKind.NETWORK_ERROR, str(e) or type(e).__name__)
            return TranslationResult.failure(error.with_prefix(FAILURE_PREFIX), chunk_count=1)
        if on_progress:
            on_progress("translate", 1, 1, "")
        return TranslationResult.success(
            decoded.text, chunk_count=1, detected_source=decoded.detected_source,
        )

    def _translate_chunked(
        self,
        text: str,
        source_code: str,
        target_code: str,
        on_progress: ProgressCallback | None,
    ) -> TranslationResult:
        chunks = split_into_chunks(text, self._max_chunk_size)
        total = len(chunks)
        logger.debug(
            "Split %d chars into %d chunk(s): %s",
            len(text), total, [len(c) for c in chunks],
        )

        translated: list[str] = []
        dropped: list[int] = []
        detected: str | None = None

        # One request at a time; joined output keeps chunk order
        for i, chunk in enumerate(chunks):
            if on_progress:
                on_progress("translate", i, total, "")
            try:
                decoded = self._request(TranslationRequest(chunk, source_code, target_code))
            except TranslationError as e:
                logger.warning(
                    "Dropping chunk %d/%d (%s): %s", i + 1, total, e.kind.value, e.message,
                )
                dropped.append(i)
                continue
            except Exception:
                logger.exception("Dropping chunk %d/%d after an unexpected error", i + 1, total)
                dropped.append(i)
                continue
            translated.append(decoded.text)
            detected = detected or decoded.detected_source

        if on_progress:
            on_progress("translate", total, total, "")

        joined = " ".join(translated).strip()
        if not joined:
            error = TranslationError(
                ErrorKind.EMPTY_TRANSLATION, "Translation returned empty result",
            )
            return TranslationResult.failure(error, chunk_count=total)

        return TranslationResult.success(
            joined, chunk_count=total, dropped_chunks=dropped, detected_source=detected,
        )
