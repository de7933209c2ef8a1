"""Reply pipeline behavior configuration (env names and defaults only)."""

from __future__ import annotations

ENV_REPLY_TRIGGER_WORDS = "REPLY_TRIGGER_WORDS"
ENV_GREETING_ENABLED = "GREETING_ENABLED"

# Empty means every recognized utterance gets a reply.
DEFAULT_REPLY_TRIGGER_WORDS: tuple[str, ...] = ()

DEFAULT_GREETING_ENABLED: bool = False

GREETING_INSTRUCTION: str = (
    "会議に参加したことを簡単に挨拶してください。"
    "「こんにちは、よろしくお願いします。」のような短い挨拶をしてください。"
)

__all__ = [
    "DEFAULT_GREETING_ENABLED",
    "DEFAULT_REPLY_TRIGGER_WORDS",
    "ENV_GREETING_ENABLED",
    "ENV_REPLY_TRIGGER_WORDS",
    "GREETING_INSTRUCTION",
]
