"""Factory wiring shared pipeline services into per-connection sessions."""

from __future__ import annotations

from meet_agent.state.settings import AppSettings

from .playback import MessageSender
from .runner import PipelineRunner
from .session import CycleCallback, ConnectionSession


class PipelineBridge:
    def __init__(self, *, runner: PipelineRunner, settings: AppSettings) -> None:
        self._runner = runner
        self._settings = settings

    @property
    def greeting_enabled(self) -> bool:
        return self._settings.pipeline.greeting_enabled

    def new_session(
        self,
        session_id: str,
        send: MessageSender,
        *,
        on_cycle_complete: CycleCallback | None = None,
    ) -> ConnectionSession:
        audio = self._settings.audio
        return ConnectionSession(
            session_id=session_id,
            runner=self._runner,
            send=send,
            flush_size_bytes=audio.flush_size_bytes,
            min_utterance_bytes=audio.min_utterance_bytes,
            flush_idle_s=audio.flush_idle_s,
            history_turns=self._settings.llm.history_turns,
            on_cycle_complete=on_cycle_complete,
        )


__all__ = ["PipelineBridge"]
