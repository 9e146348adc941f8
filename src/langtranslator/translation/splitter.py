"""Sentence-bounded chunking of long texts for size-limited requests.

The endpoint rejects or truncates queries much past ~5000 characters, so
texts above ``DEFAULT_MAX_CHUNK_SIZE`` are split at sentence boundaries and
greedily packed into chunks. A sentence is never split: one longer than the
limit becomes a chunk of its own.
"""

from __future__ import annotations

import re

DEFAULT_MAX_CHUNK_SIZE = 4500

# Boundary: whitespace preceded by sentence-ending punctuation
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_into_sentences(text: str) -> list[str]:
    """Split text into trimmed, non-blank sentences."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text.strip()) if s.strip()]


def pack_sentences(sentences: list[str], max_chunk_size: int) -> list[str]:
    """Greedily pack sentences (joined by one space) into chunks of at most max_chunk_size.

    A new chunk is started when appending the next sentence would overflow
    the current one. Oversized sentences are kept whole.
    """
    chunks: list[str] = []
    current: list[str] = []
    current_len = 0

    for sentence in sentences:
        added = len(sentence) + (1 if current else 0)
        if current and current_len + added > max_chunk_size:
            chunks.append(" ".join(current))
            current = []
            current_len = 0
            added = len(sentence)
        current.append(sentence)
        current_len += added

    if current:
        chunks.append(" ".join(current))

    return [c for c in chunks if c.strip()]


def split_into_chunks(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """Split normalized text into ordered, sentence-bounded chunks."""
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    return pack_sentences(split_into_sentences(text), max_chunk_size)
