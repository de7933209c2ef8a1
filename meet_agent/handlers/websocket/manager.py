"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import uuid
import logging
import contextlib
from functools import partial

from fastapi import WebSocket

from meet_agent.state import RuntimeDeps
from meet_agent.pipeline.runner import CycleOutcome
from meet_agent.pipeline.session import ConnectionSession
from meet_agent.config.websocket import WS_CLOSE_BUSY_CODE, WS_CLOSE_BUSY_REASON

from .watchdog import SessionWatchdog
from .message_loop import run_message_loop
from .errors import reject_connection, safe_send_message

logger = logging.getLogger(__name__)


def _log_cycle(session: ConnectionSession, outcome: CycleOutcome) -> None:
    reply = outcome.reply
    logger.info(
        "reply cycle done session_id=%s replied=%s failed=%s sentences=%d fallback=%s turns=%d",
        session.session_id,
        outcome.replied,
        outcome.failed,
        reply.sentences if reply else 0,
        reply.fallback if reply else False,
        len(session.conversation.history),
    )


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.connections.try_admit(ws):
        await reject_connection(ws, message=WS_CLOSE_BUSY_REASON, close_code=WS_CLOSE_BUSY_CODE)
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.release(ws)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    watchdog: SessionWatchdog | None = None
    session: ConnectionSession | None = None
    admitted = False
    try:
        if not await _prepare_connection(ws, runtime_deps):
            return
        admitted = True

        session = runtime_deps.pipeline_bridge.new_session(
            uuid.uuid4().hex,
            partial(safe_send_message, ws),
            on_cycle_complete=_log_cycle,
        )
        await runtime_deps.sessions.register(session)

        settings = runtime_deps.settings.websocket
        watchdog = SessionWatchdog(
            ws,
            session,
            idle_timeout_s=settings.idle_timeout_s,
            watchdog_tick_s=settings.watchdog_tick_s,
            max_connection_duration_s=settings.max_connection_duration_s,
        )
        watchdog.start()

        logger.info(
            "WebSocket connection accepted session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.active(),
        )
        if runtime_deps.pipeline_bridge.greeting_enabled:
            session.greet()
        await run_message_loop(ws, watchdog, session)
    finally:
        if watchdog is not None:
            with contextlib.suppress(Exception):
                await watchdog.stop()

        if session is not None:
            with contextlib.suppress(Exception):
                await runtime_deps.sessions.close(session.session_id)

        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.release(ws)
            logger.info(
                "WebSocket connection closed session_id=%s. Active: %s",
                session.session_id if session is not None else None,
                runtime_deps.connections.active(),
            )


__all__ = ["handle_websocket_connection"]
