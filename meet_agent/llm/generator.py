"""Token-streaming reply generation via the OpenAI chat completions API."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Sequence, AsyncIterator

import openai
from openai import AsyncOpenAI

from meet_agent.errors import GenerationError
from meet_agent.state.conversation import Turn

logger = logging.getLogger(__name__)


class ReplyGenerator:
    def __init__(
        self,
        *,
        client: AsyncOpenAI,
        model: str,
        persona_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> None:
        self._client = client
        self._model = model
        self._persona_prompt = persona_prompt
        self._max_tokens = int(max_tokens)
        self._temperature = float(temperature)

    def build_messages(
        self,
        history: Sequence[Turn],
        user_text: str | None,
        *,
        instructions: str | None = None,
    ) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = [{"role": "system", "content": self._persona_prompt}]
        messages.extend({"role": turn.role, "content": turn.text} for turn in history)
        if instructions:
            messages.append({"role": "system", "content": instructions})
        if user_text:
            messages.append({"role": "user", "content": user_text})
        return messages

    async def stream_reply(
        self,
        history: Sequence[Turn],
        user_text: str | None,
        *,
        instructions: str | None = None,
    ) -> AsyncIterator[str]:
        """Yield reply text chunks as the model produces them."""
        messages = self.build_messages(history, user_text, instructions=instructions)
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                stream=True,
            )
            # Leaving the block early (caller stopped reading) releases the HTTP response.
            async with stream:
                async for chunk in stream:
                    if not chunk.choices:
                        continue
                    delta = chunk.choices[0].delta.content
                    if delta:
                        yield delta
        except openai.OpenAIError as exc:
            logger.warning("chat completion stream failed: %s", exc)
            raise GenerationError(str(exc)) from exc


__all__ = ["ReplyGenerator"]
