"""Ordered delivery of reply text and synthesized audio to the transport."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from meet_agent.state.conversation import ConversationState

from .messages import audio_message, response_message, audio_done_message

logger = logging.getLogger(__name__)

MessageSender = Callable[[dict[str, Any]], Awaitable[bool]]


class PlaybackSequencer:
    """Sequence one reply cycle's output.

    Holds a single in-progress sentence slot: `begin_sentence` claims it and
    `play` (or `abandon`) releases it, so sentence k's audio is always sent
    before sentence k+1 is announced. The receiving page plays audio as it
    arrives; `audio_done` only says nothing more is coming.
    """

    def __init__(self, send: MessageSender, conversation: ConversationState) -> None:
        self._send = send
        self._conversation = conversation
        self._sentences = 0
        self._in_progress: str | None = None
        self._finished = False

    @property
    def spoke(self) -> bool:
        return self._sentences > 0

    @property
    def sentence_count(self) -> int:
        return self._sentences

    @property
    def finished(self) -> bool:
        return self._finished

    async def begin_sentence(self, text: str) -> None:
        if self._in_progress is not None:
            raise RuntimeError(f"sentence still in progress: {self._in_progress!r}")
        if self._finished:
            raise RuntimeError("reply already finished")
        self._in_progress = text
        self._conversation.is_speaking = True
        append = self._sentences > 0
        self._sentences += 1
        await self._send(response_message(text, append=append))

    async def play(self, pcm: bytes) -> None:
        if self._in_progress is None:
            raise RuntimeError("no sentence in progress")
        await self._send(audio_message(pcm))
        self._in_progress = None

    def abandon(self) -> None:
        self._in_progress = None

    async def finish(self) -> None:
        """Send the single completion signal for this reply cycle."""
        if self._finished:
            return
        self._finished = True
        self._in_progress = None
        await self._send(audio_done_message())
        logger.debug("reply complete session_id=%s sentences=%d", self._conversation.session_id, self._sentences)


__all__ = ["MessageSender", "PlaybackSequencer"]
