from __future__ import annotations

from types import SimpleNamespace

import openai
import pytest

from meet_agent.errors import GenerationError
from meet_agent.llm.generator import ReplyGenerator
from meet_agent.state.conversation import Turn


def _chunk(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class _Stream:
    def __init__(self, chunks: list[SimpleNamespace], error: Exception | None = None) -> None:
        self._chunks = chunks
        self._error = error
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error


class _FakeCompletions:
    def __init__(self, stream: _Stream) -> None:
        self.stream = stream
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return self.stream


def _generator(stream: _Stream) -> tuple[ReplyGenerator, _FakeCompletions]:
    completions = _FakeCompletions(stream)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    generator = ReplyGenerator(
        client=client,
        model="gpt-4o-mini",
        persona_prompt="persona",
        max_tokens=200,
        temperature=0.7,
    )
    return generator, completions


def test_build_messages_orders_persona_history_and_user() -> None:
    generator, _ = _generator(_Stream([]))
    history = [Turn("user", "q1"), Turn("assistant", "a1")]
    messages = generator.build_messages(history, "q2")
    assert messages == [
        {"role": "system", "content": "persona"},
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "a1"},
        {"role": "user", "content": "q2"},
    ]


def test_build_messages_with_instructions_and_no_user_text() -> None:
    generator, _ = _generator(_Stream([]))
    messages = generator.build_messages([], None, instructions="greet")
    assert messages == [
        {"role": "system", "content": "persona"},
        {"role": "system", "content": "greet"},
    ]


@pytest.mark.asyncio
async def test_stream_reply_yields_non_empty_deltas() -> None:
    stream = _Stream([_chunk("こんに"), _chunk(None), SimpleNamespace(choices=[]), _chunk("ちは。")])
    generator, completions = _generator(stream)

    out = [piece async for piece in generator.stream_reply([], "やあ")]

    assert out == ["こんに", "ちは。"]
    call = completions.calls[0]
    assert call["stream"] is True
    assert call["model"] == "gpt-4o-mini"
    assert call["max_tokens"] == 200
    assert stream.closed


@pytest.mark.asyncio
async def test_stream_failure_is_wrapped() -> None:
    stream = _Stream([_chunk("途中")], error=openai.OpenAIError("stream dropped"))
    generator, _ = _generator(stream)

    out: list[str] = []
    with pytest.raises(GenerationError, match="stream dropped"):
        async for piece in generator.stream_reply([], "やあ"):
            out.append(piece)
    assert out == ["途中"]
    assert stream.closed


@pytest.mark.asyncio
async def test_abandoned_reply_closes_upstream_stream() -> None:
    stream = _Stream([_chunk("一文目。"), _chunk("二文目。")])
    generator, _ = _generator(stream)

    replies = generator.stream_reply([], "やあ")
    assert await replies.__anext__() == "一文目。"
    await replies.aclose()

    assert stream.closed
