"""Split long text into sentence-bounded chunks for batch translation."""

from __future__ import annotations

import re

from mtbridge.config import DEFAULT_SEGMENT_LENGTH

# Sentence terminators (ASCII and CJK) and newlines; kept as separate parts
_SENTENCE_BREAK = re.compile(r"([。！？.!?\n]+)")


def split_sentences(text: str, max_length: int = DEFAULT_SEGMENT_LENGTH) -> list[str]:
    """Group sentences into chunks of at most ``max_length`` characters.

    Text is split after runs of sentence terminators and newlines, then
    consecutive pieces are packed greedily. A piece longer than
    ``max_length`` is never cut; it becomes its own chunk. Chunks are
    stripped and empty chunks are dropped.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}")

    chunks: list[str] = []
    current = ""

    for part in _SENTENCE_BREAK.split(text):
        if len(current) + len(part) <= max_length:
            current += part
            continue
        if current.strip():
            chunks.append(current.strip())
        current = part

    if current.strip():
        chunks.append(current.strip())

    return chunks


def join_segments(pieces: list[str]) -> str:
    """Rejoin translated chunks."""
    return "".join(pieces)
