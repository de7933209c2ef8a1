"""Streamed reply generation with per-sentence synthesis."""

from __future__ import annotations

import logging
import contextlib
from typing import Any
from dataclasses import dataclass

from meet_agent.llm.segmenter import SentenceSegmenter
from meet_agent.state.conversation import ConversationState

from .playback import PlaybackSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReplyResult:
    text: str
    sentences: int
    fallback: bool


class ResponseGenerator:
    """Drive one model reply and speak it sentence by sentence.

    Each completed sentence is shown, synthesized and forwarded before the
    next token chunk is consumed, so audio starts while the rest of the reply
    is still being generated and sentences can never be reordered.
    """

    def __init__(self, *, generator: Any, synthesizer: Any, fallback_reply: str) -> None:
        self._generator = generator
        self._synthesizer = synthesizer
        self._fallback_reply = fallback_reply

    async def respond(
        self,
        conversation: ConversationState,
        playback: PlaybackSequencer,
        *,
        user_text: str | None,
        instructions: str | None = None,
    ) -> ReplyResult:
        history = conversation.trailing_history()
        segmenter = SentenceSegmenter()
        full_response: list[str] = []

        stream = self._generator.stream_reply(history, user_text, instructions=instructions)
        async with contextlib.aclosing(stream):
            async for chunk in stream:
                full_response.append(chunk)
                for sentence in segmenter.push(chunk):
                    await self._speak(sentence, playback)

        tail = segmenter.flush()
        if tail is not None:
            await self._speak(tail, playback)

        reply_text = "".join(full_response).strip()
        fallback = not playback.spoke
        if fallback:
            logger.warning("model returned no text session_id=%s; using fallback reply", conversation.session_id)
            reply_text = self._fallback_reply
            await self._speak(reply_text, playback)

        if user_text:
            conversation.commit_turn(user_text, reply_text)
        await playback.finish()
        logger.debug("assistant replied session_id=%s sentences=%d", conversation.session_id, playback.sentence_count)
        return ReplyResult(text=reply_text, sentences=playback.sentence_count, fallback=fallback)

    async def _speak(self, sentence: str, playback: PlaybackSequencer) -> None:
        await playback.begin_sentence(sentence)
        try:
            pcm = await self._synthesizer.synthesize(sentence)
        except BaseException:
            playback.abandon()
            raise
        await playback.play(pcm)


__all__ = ["ReplyResult", "ResponseGenerator"]
