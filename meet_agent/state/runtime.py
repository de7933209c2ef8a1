"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from meet_agent.state.settings import AppSettings
    from meet_agent.pipeline.bridge import PipelineBridge
    from meet_agent.handlers.sessions import SessionRegistry
    from meet_agent.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    sessions: SessionRegistry
    pipeline_bridge: PipelineBridge
    settings: AppSettings
    _http_client: Any
    _openai_client: Any

    async def shutdown(self) -> None:
        try:
            await self.sessions.close_all()
        except Exception:
            logger.exception("session shutdown failed")
        try:
            await self._openai_client.close()
        except Exception:
            logger.exception("openai client shutdown failed")
        try:
            await self._http_client.aclose()
        except Exception:
            logger.exception("http client shutdown failed")


__all__ = ["RuntimeDeps"]
