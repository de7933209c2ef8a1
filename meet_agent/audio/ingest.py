"""Inbound audio accumulation and flush decisions for one connection.

The buffer is a small state machine:

    IDLE --frame--> ACCUMULATING --size trigger / idle timer--> FLUSHING
    FLUSHING --cycle complete--> IDLE (reply spoken, buffer dropped)
    FLUSHING --cycle complete--> ACCUMULATING (no reply, audio kept)

It never touches timers or the event loop itself; callers act on the
returned `IngestAction`.
"""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class IngestState(enum.Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FLUSHING = "flushing"


class IngestAction(enum.Enum):
    NONE = "none"
    DISCARD = "discard"
    ARM_TIMER = "arm_timer"
    FLUSH_NOW = "flush_now"


class AudioIngestBuffer:
    def __init__(self, *, flush_size_bytes: int, min_utterance_bytes: int) -> None:
        self.flush_size_bytes = max(1, int(flush_size_bytes))
        self.min_utterance_bytes = max(0, int(min_utterance_bytes))
        self.state = IngestState.IDLE
        self._chunks: list[bytes] = []
        self._pending_bytes = 0

    @property
    def pending_bytes(self) -> int:
        return self._pending_bytes

    def append(self, chunk: bytes, *, speaking: bool) -> IngestAction:
        if speaking:
            # Almost certainly our own voice looping back through the meeting.
            return IngestAction.DISCARD
        if not chunk:
            return IngestAction.NONE

        self._chunks.append(chunk)
        self._pending_bytes += len(chunk)

        if self.state is IngestState.FLUSHING:
            return IngestAction.NONE

        self.state = IngestState.ACCUMULATING
        if self._pending_bytes >= self.flush_size_bytes:
            return IngestAction.FLUSH_NOW
        return IngestAction.ARM_TIMER

    def begin_flush(self) -> bytes | None:
        """Move buffered audio out as one utterance blob.

        Returns None when there is nothing to flush, a flush is already in
        flight, or the blob is below the noise floor (it is dropped).
        """
        if self.state is not IngestState.ACCUMULATING:
            return None

        blob = b"".join(self._chunks)
        self._clear()
        if len(blob) < self.min_utterance_bytes:
            logger.debug("audio too short (%d bytes); dropping", len(blob))
            self.state = IngestState.IDLE
            return None

        self.state = IngestState.FLUSHING
        return blob

    def claim(self) -> bool:
        """Enter FLUSHING for a cycle that consumes no captured audio (a greeting)."""
        if self.state is IngestState.FLUSHING:
            return False
        self.state = IngestState.FLUSHING
        return True

    def finish_cycle(self, *, discard: bool) -> IngestAction:
        if self.state is not IngestState.FLUSHING:
            return IngestAction.NONE
        if discard:
            if self._pending_bytes:
                logger.debug("discarding %d bytes captured during reply", self._pending_bytes)
            self._clear()
        if self._chunks:
            self.state = IngestState.ACCUMULATING
            return IngestAction.ARM_TIMER
        self.state = IngestState.IDLE
        return IngestAction.NONE

    def reset(self) -> None:
        self._clear()
        self.state = IngestState.IDLE

    def _clear(self) -> None:
        self._chunks.clear()
        self._pending_bytes = 0


__all__ = ["AudioIngestBuffer", "IngestAction", "IngestState"]
