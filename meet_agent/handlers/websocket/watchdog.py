"""Close connections whose session went quiet or outlived its time budget."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from meet_agent.pipeline.session import ConnectionSession
from meet_agent.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)


class SessionWatchdog:
    """Watch one session and close its socket on idle or max duration.

    Idleness is read from the session itself: only accepted audio and reply
    cycles count as activity, so a client that keeps pinging (or keeps
    streaming while the agent talks) without ever being heard still times out.
    A zero timeout disables that check.
    """

    def __init__(
        self,
        websocket: Any,
        session: ConnectionSession,
        *,
        idle_timeout_s: float,
        watchdog_tick_s: float,
        max_connection_duration_s: float,
        now_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ws = websocket
        self._session = session
        self._idle_timeout_s = float(idle_timeout_s)
        self._tick_s = float(watchdog_tick_s)
        self._max_duration_s = float(max_connection_duration_s)
        self._now = now_fn
        self._started_at = now_fn()
        self._stopped = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def tick_s(self) -> float:
        return self._tick_s

    @property
    def closed(self) -> bool:
        return self._stopped.is_set()

    def close_reason(self, now: float) -> tuple[int, str] | None:
        """Return the (code, reason) to close with at `now`, or None to keep going."""
        if self._max_duration_s > 0 and now - self._started_at >= self._max_duration_s:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._session.busy or self._idle_timeout_s <= 0:
            return None
        quiet_since = max(self._started_at, self._session.last_activity)
        if now - quiet_since >= self._idle_timeout_s:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        self._stopped.set()
        task, self._task = self._task, None
        if task is not None:
            await task

    async def _run(self) -> None:
        while not self._stopped.is_set():
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stopped.wait(), timeout=self._tick_s)
                return
            verdict = self.close_reason(self._now())
            if verdict is None:
                continue
            code, reason = verdict
            logger.info("closing session_id=%s: %s", self._session.session_id, reason)
            self._stopped.set()
            try:
                await self._ws.close(code=code, reason=reason)
            except Exception as exc:
                logger.debug("close failed session_id=%s: %s", self._session.session_id, exc)
            return


__all__ = ["SessionWatchdog"]
