"""Per-connection pipeline driver: ingest triggers, idle timer and the cycle task."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from meet_agent.state.conversation import ConversationState
from meet_agent.audio.ingest import IngestAction, AudioIngestBuffer

from .playback import MessageSender
from .runner import CycleOutcome, PipelineRunner

logger = logging.getLogger(__name__)

CycleCallback = Callable[["ConnectionSession", CycleOutcome], None]


class ConnectionSession:
    """Own one connection's buffers, flags and timers.

    At most one reply cycle runs at a time. Frames keep arriving while a cycle
    runs; they are buffered (or dropped while speaking) but never start a
    second cycle.
    """

    def __init__(
        self,
        *,
        session_id: str,
        runner: PipelineRunner,
        send: MessageSender,
        flush_size_bytes: int,
        min_utterance_bytes: int,
        flush_idle_s: float,
        history_turns: int,
        on_cycle_complete: CycleCallback | None = None,
    ) -> None:
        self.session_id = session_id
        self.conversation = ConversationState(session_id=session_id, max_turns=history_turns)
        self.ingest = AudioIngestBuffer(flush_size_bytes=flush_size_bytes, min_utterance_bytes=min_utterance_bytes)
        self._runner = runner
        self._send = send
        self._flush_idle_s = float(flush_idle_s)
        self._on_cycle_complete = on_cycle_complete
        self._timer: asyncio.TimerHandle | None = None
        self._cycle_task: asyncio.Task | None = None
        self._closed = False
        # Monotonic time of the last accepted frame or cycle boundary.
        self.last_activity = time.monotonic()

    @property
    def busy(self) -> bool:
        return self._cycle_task is not None

    @property
    def timer_armed(self) -> bool:
        return self._timer is not None

    def feed(self, chunk: bytes) -> None:
        if self._closed:
            return
        action = self.ingest.append(chunk, speaking=self.conversation.is_speaking)
        if chunk and action is not IngestAction.DISCARD:
            self.last_activity = time.monotonic()
        if action is IngestAction.ARM_TIMER:
            self._arm_timer()
        elif action is IngestAction.FLUSH_NOW:
            self.flush()

    def flush(self) -> bool:
        """Start a reply cycle from buffered audio; False if nothing was started."""
        self._cancel_timer()
        if self._closed or self._cycle_task is not None:
            return False
        blob = self.ingest.begin_flush()
        if blob is None:
            return False
        logger.debug("flushing %d bytes session_id=%s", len(blob), self.session_id)
        self._start_cycle(lambda: self._runner.run_cycle(self.conversation, self._send, blob))
        return True

    def greet(self) -> bool:
        if self._closed or self._cycle_task is not None or not self.ingest.claim():
            return False
        self._cancel_timer()
        self._start_cycle(lambda: self._runner.greet(self.conversation, self._send))
        return True

    async def wait_idle(self) -> None:
        while self._cycle_task is not None:
            await asyncio.shield(self._cycle_task)

    async def close(self) -> None:
        self._closed = True
        self._cancel_timer()
        task, self._cycle_task = self._cycle_task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        self.ingest.reset()
        self.conversation.is_speaking = False

    def _start_cycle(self, cycle: Callable[[], Awaitable[CycleOutcome]]) -> None:
        self.last_activity = time.monotonic()
        self._cycle_task = asyncio.create_task(self._run_cycle(cycle))

    async def _run_cycle(self, cycle: Callable[[], Awaitable[CycleOutcome]]) -> CycleOutcome:
        outcome = await cycle()

        # No await between here and the end: the discard and the flag release
        # happen before any further frame is processed.
        action = self.ingest.finish_cycle(discard=outcome.replied)
        self.conversation.is_speaking = False
        self._cycle_task = None
        self.last_activity = time.monotonic()
        if action is IngestAction.ARM_TIMER and not self._closed:
            self._arm_timer()

        if self._on_cycle_complete is not None:
            try:
                self._on_cycle_complete(self, outcome)
            except Exception:
                logger.exception("cycle completion callback failed session_id=%s", self.session_id)
        return outcome

    def _arm_timer(self) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._flush_idle_s, self._on_idle)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_idle(self) -> None:
        self._timer = None
        self.flush()


__all__ = ["ConnectionSession", "CycleCallback"]
