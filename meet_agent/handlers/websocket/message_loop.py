"""WebSocket receive loop and dispatch for the bot-page audio protocol (/ws/audio)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocket, WebSocketDisconnect

from meet_agent.pipeline.session import ConnectionSession
from meet_agent.config.websocket import WS_KEY_TYPE, WS_MSG_PONG, WS_MSG_PING, WS_MSG_AUDIO

from .watchdog import SessionWatchdog
from .errors import safe_send_message
from .parser import decode_audio, parse_client_message

logger = logging.getLogger(__name__)

HandlerFn = Callable[[WebSocket, ConnectionSession, dict[str, Any]], Awaitable[None]]


async def _recv_with_watchdog(ws: WebSocket, watchdog: SessionWatchdog) -> tuple[str | bytes | None, bool]:
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=watchdog.tick_s * 2)
    except TimeoutError:
        return None, watchdog.closed
    except RuntimeError:
        # The watchdog closed the socket underneath us.
        return None, True
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    # Text frames are the protocol; binary frames are tolerated if they hold JSON.
    return message.get("text") or message.get("bytes"), False


async def _handle_audio(_ws: WebSocket, session: ConnectionSession, msg: dict[str, Any]) -> None:
    try:
        pcm = decode_audio(msg)
    except ValueError as exc:
        logger.warning("ignoring malformed audio message session_id=%s: %s", session.session_id, exc)
        return
    session.feed(pcm)


async def _handle_ping(ws: WebSocket, _session: ConnectionSession, _msg: dict[str, Any]) -> None:
    await safe_send_message(ws, {WS_KEY_TYPE: WS_MSG_PONG})


HANDLERS: dict[str, HandlerFn] = {
    WS_MSG_AUDIO: _handle_audio,
    WS_MSG_PING: _handle_ping,
}


async def run_message_loop(ws: WebSocket, watchdog: SessionWatchdog, session: ConnectionSession) -> None:
    packets = 0
    try:
        while not watchdog.closed:
            raw, should_exit = await _recv_with_watchdog(ws, watchdog)
            if should_exit:
                return
            if raw is None:
                continue

            try:
                msg = parse_client_message(raw)
            except ValueError as exc:
                logger.warning("ignoring unparseable message session_id=%s: %s", session.session_id, exc)
                continue

            msg_type = msg[WS_KEY_TYPE]
            handler = HANDLERS.get(msg_type)
            if handler is None:
                logger.warning("ignoring unknown message type %r session_id=%s", msg_type, session.session_id)
                continue

            await handler(ws, session, msg)

            packets += 1
            if packets % 100 == 0:
                logger.debug(
                    "session_id=%s packets=%d pending_bytes=%d",
                    session.session_id,
                    packets,
                    session.ingest.pending_bytes,
                )
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]
