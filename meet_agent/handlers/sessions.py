"""Registry of live pipeline sessions keyed by connection id."""

from __future__ import annotations

import asyncio
import logging

from meet_agent.pipeline.session import ConnectionSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sessions: dict[str, ConnectionSession] = {}

    async def register(self, session: ConnectionSession) -> None:
        async with self._lock:
            if session.session_id in self._sessions:
                raise ValueError(f"session already registered: {session.session_id}")
            self._sessions[session.session_id] = session

    async def close(self, session_id: str) -> None:
        """Unregister a session and tear down its buffers, timer and cycle."""
        async with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            await session.close()

    async def close_all(self) -> None:
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            try:
                await session.close()
            except Exception:
                logger.exception("session close failed session_id=%s", session.session_id)

    def count(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
