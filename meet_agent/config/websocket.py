"""WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws/audio"

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_DATA = "data"
WS_KEY_TEXT = "text"
WS_KEY_SPEAKER = "speaker"
WS_KEY_MESSAGE = "message"

# Inbound message types
WS_MSG_AUDIO = "audio"
WS_MSG_PING = "ping"

# Outbound message types
WS_MSG_TRANSCRIPT = "transcript"
WS_MSG_RESPONSE = "response"
WS_MSG_RESPONSE_APPEND = "response_append"
WS_MSG_AUDIO_DONE = "audio_done"
WS_MSG_ERROR = "error"
WS_MSG_PONG = "pong"

WS_SPEAKER_USER = "user"

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"
WS_CLOSE_BUSY_REASON = "server at capacity"

# Client-visible error text; upstream details stay in the server log.
WS_ERROR_PROCESSING_FAILED = "Processing failed"

ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

# Meetings run long and can be silent; close only after a long quiet spell.
DEFAULT_WS_IDLE_TIMEOUT_S: float = 600.0
DEFAULT_WS_WATCHDOG_TICK_S: float = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S: float = 0.0

__all__ = [
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_PROCESSING_FAILED",
    "WS_KEY_DATA",
    "WS_KEY_MESSAGE",
    "WS_KEY_SPEAKER",
    "WS_KEY_TEXT",
    "WS_KEY_TYPE",
    "WS_MSG_AUDIO",
    "WS_MSG_AUDIO_DONE",
    "WS_MSG_ERROR",
    "WS_MSG_PING",
    "WS_MSG_PONG",
    "WS_MSG_RESPONSE",
    "WS_MSG_RESPONSE_APPEND",
    "WS_MSG_TRANSCRIPT",
    "WS_SPEAKER_USER",
]
