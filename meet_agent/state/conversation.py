"""Per-connection conversation state (dialogue history and speaking flag)."""

from __future__ import annotations

from typing import Literal
from dataclasses import field, dataclass

from meet_agent.config.llm import DEFAULT_LLM_HISTORY_TURNS

Role = Literal["user", "assistant"]


@dataclass(frozen=True, slots=True)
class Turn:
    role: Role
    text: str


@dataclass(slots=True)
class ConversationState:
    """Dialogue memory and echo-suppression flag for one connection.

    `history` is mutated only through `commit_turn`, after a reply completes.
    `is_speaking` is true from the first emitted reply sentence until the
    reply cycle ends; inbound audio is dropped while it is set.
    """

    session_id: str
    history: list[Turn] = field(default_factory=list)
    is_speaking: bool = False
    max_turns: int = DEFAULT_LLM_HISTORY_TURNS

    def trailing_history(self) -> list[Turn]:
        window = self.history[-self.max_turns :] if self.max_turns > 0 else []
        start = 0
        while start < len(window) and window[start].role != "user":
            start += 1
        return window[start:]

    def commit_turn(self, user_text: str, reply_text: str) -> None:
        self.history.append(Turn(role="user", text=user_text))
        self.history.append(Turn(role="assistant", text=reply_text))


__all__ = ["ConversationState", "Role", "Turn"]
