"""Incremental sentence segmentation over a token stream."""

from __future__ import annotations

import re

# Full-width Japanese sentence terminators, plus line breaks.
SENTENCE_TERMINATORS = "。！？\n"

_SENTENCE_RE = re.compile(rf"^(.*?[{re.escape(SENTENCE_TERMINATORS)}])", re.DOTALL)


class SentenceSegmenter:
    """Slice streamed model output into speakable sentences as soon as they end.

    Text is cut at the earliest terminator, so the concatenation of every raw
    unit (before trimming) reproduces the input exactly. Units that trim to
    nothing, e.g. a bare line break, are not returned.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def push(self, chunk: str) -> list[str]:
        self._buffer += chunk
        sentences: list[str] = []
        while True:
            match = _SENTENCE_RE.match(self._buffer)
            if match is None:
                break
            raw = match.group(1)
            self._buffer = self._buffer[len(raw) :]
            sentence = raw.strip()
            if sentence:
                sentences.append(sentence)
        return sentences

    def flush(self) -> str | None:
        """Return the trailing unterminated sentence, if it holds any text."""
        rest, self._buffer = self._buffer, ""
        rest = rest.strip()
        return rest or None


def split_sentences(text: str) -> list[str]:
    """Segment a complete string the same way the streaming path does."""
    segmenter = SentenceSegmenter()
    sentences = segmenter.push(text)
    tail = segmenter.flush()
    if tail is not None:
        sentences.append(tail)
    return sentences


__all__ = ["SENTENCE_TERMINATORS", "SentenceSegmenter", "split_sentences"]
