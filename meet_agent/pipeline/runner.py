"""One reply cycle: recognize an utterance, reply, and contain failures."""

from __future__ import annotations

import logging
from typing import Any
from dataclasses import dataclass
from collections.abc import Sequence

from meet_agent.errors import UpstreamServiceError
from meet_agent.state.conversation import ConversationState
from meet_agent.config.websocket import WS_ERROR_PROCESSING_FAILED

from .responder import ReplyResult, ResponseGenerator
from .messages import error_message, transcript_message
from .playback import MessageSender, PlaybackSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CycleOutcome:
    transcript: str
    replied: bool
    failed: bool = False
    reply: ReplyResult | None = None


def should_respond(transcript: str, trigger_words: Sequence[str]) -> bool:
    """True when no trigger words are configured or any of them occurs in `transcript`."""
    if not trigger_words:
        return True
    lowered = transcript.lower()
    return any(word.lower() in lowered for word in trigger_words if word)


class PipelineRunner:
    """Run reply cycles for any session; holds no per-connection state."""

    def __init__(
        self,
        *,
        recognizer: Any,
        responder: ResponseGenerator,
        trigger_words: Sequence[str] = (),
        greeting_instruction: str = "",
    ) -> None:
        self._recognizer = recognizer
        self._responder = responder
        self._trigger_words = tuple(trigger_words)
        self._greeting_instruction = greeting_instruction

    async def run_cycle(self, conversation: ConversationState, send: MessageSender, audio: bytes) -> CycleOutcome:
        playback = PlaybackSequencer(send, conversation)
        transcript = ""
        try:
            transcript = await self._recognizer.transcribe(audio)
            if not transcript:
                logger.debug("no speech detected session_id=%s (%d bytes)", conversation.session_id, len(audio))
                return CycleOutcome(transcript="", replied=False)

            logger.info("user said session_id=%s: %s", conversation.session_id, transcript)
            await send(transcript_message(transcript))

            if not should_respond(transcript, self._trigger_words):
                logger.debug("no trigger word in transcript session_id=%s", conversation.session_id)
                return CycleOutcome(transcript=transcript, replied=False)

            reply = await self._responder.respond(conversation, playback, user_text=transcript)
            return CycleOutcome(transcript=transcript, replied=True, reply=reply)
        except UpstreamServiceError as exc:
            logger.warning("reply cycle failed session_id=%s: %s", conversation.session_id, exc)
        except Exception:
            logger.exception("reply cycle crashed session_id=%s", conversation.session_id)

        await self._report_failure(playback, send)
        return CycleOutcome(transcript=transcript, replied=playback.spoke, failed=True)

    async def greet(self, conversation: ConversationState, send: MessageSender) -> CycleOutcome:
        playback = PlaybackSequencer(send, conversation)
        try:
            reply = await self._responder.respond(
                conversation,
                playback,
                user_text=None,
                instructions=self._greeting_instruction,
            )
            return CycleOutcome(transcript="", replied=True, reply=reply)
        except UpstreamServiceError as exc:
            logger.warning("greeting failed session_id=%s: %s", conversation.session_id, exc)
        except Exception:
            logger.exception("greeting crashed session_id=%s", conversation.session_id)

        await self._report_failure(playback, send)
        return CycleOutcome(transcript="", replied=playback.spoke, failed=True)

    async def _report_failure(self, playback: PlaybackSequencer, send: MessageSender) -> None:
        # Sentences already spoken stay spoken; close the reply so the page resumes capture.
        if playback.spoke:
            await playback.finish()
        await send(error_message(WS_ERROR_PROCESSING_FAILED))


__all__ = ["CycleOutcome", "PipelineRunner", "should_respond"]
