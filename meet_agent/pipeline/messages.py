"""Builders for outbound transport messages."""

from __future__ import annotations

import base64
from typing import Any

from meet_agent.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_MSG_AUDIO,
    WS_MSG_ERROR,
    WS_KEY_MESSAGE,
    WS_KEY_SPEAKER,
    WS_MSG_RESPONSE,
    WS_SPEAKER_USER,
    WS_MSG_AUDIO_DONE,
    WS_MSG_TRANSCRIPT,
    WS_MSG_RESPONSE_APPEND,
)


def transcript_message(text: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_TRANSCRIPT, WS_KEY_SPEAKER: WS_SPEAKER_USER, WS_KEY_TEXT: text}


def response_message(text: str, *, append: bool) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_RESPONSE_APPEND if append else WS_MSG_RESPONSE, WS_KEY_TEXT: text}


def audio_message(pcm: bytes) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_AUDIO, WS_KEY_DATA: base64.b64encode(pcm).decode("ascii")}


def audio_done_message() -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_AUDIO_DONE}


def error_message(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_ERROR, WS_KEY_MESSAGE: message}


__all__ = [
    "audio_done_message",
    "audio_message",
    "error_message",
    "response_message",
    "transcript_message",
]
