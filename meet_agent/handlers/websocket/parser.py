"""Inbound message parsing/validation for the bot-page protocol."""

from __future__ import annotations

import base64
import binascii
from typing import Any

import orjson

from meet_agent.config.websocket import WS_KEY_DATA, WS_KEY_TYPE, WS_MSG_AUDIO


def parse_client_message(raw: str | bytes) -> dict[str, Any]:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")

    msg[WS_KEY_TYPE] = msg_type.strip()
    return msg


def decode_audio(msg: dict[str, Any]) -> bytes:
    """Decode the base64 PCM16 payload of an audio message."""
    if msg.get(WS_KEY_TYPE) != WS_MSG_AUDIO:
        raise ValueError("not an audio message")
    data = msg.get(WS_KEY_DATA)
    if not isinstance(data, str):
        raise ValueError("audio message missing 'data' (base64 pcm16)")
    try:
        pcm = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid base64 audio: {exc}") from exc
    if len(pcm) % 2:
        raise ValueError("pcm16 payload has an odd byte length")
    return pcm


__all__ = ["decode_audio", "parse_client_message"]
