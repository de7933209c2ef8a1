"""Admission control for bot-page connections."""

from __future__ import annotations

import asyncio
from typing import Any


class ConnectionManager:
    """Cap the number of live bot-page connections.

    Every admitted connection runs its own recognition and reply cycles against
    shared upstream quotas, so the cap is enforced before the socket is
    accepted. Slots are keyed by socket identity.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._capacity = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._slots: set[int] = set()
        self._peak = 0
        self._rejected = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    async def try_admit(self, ws: Any) -> bool:
        async with self._lock:
            if len(self._slots) >= self._capacity:
                self._rejected += 1
                return False
            self._slots.add(id(ws))
            self._peak = max(self._peak, len(self._slots))
            return True

    async def release(self, ws: Any) -> None:
        async with self._lock:
            self._slots.discard(id(ws))

    def active(self) -> int:
        return len(self._slots)

    def stats(self) -> dict[str, int]:
        return {
            "active": len(self._slots),
            "capacity": self._capacity,
            "peak": self._peak,
            "rejected": self._rejected,
        }


__all__ = ["ConnectionManager"]
