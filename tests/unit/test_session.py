from __future__ import annotations

import asyncio
from typing import Any

import pytest

from meet_agent.audio.ingest import IngestState
from meet_agent.pipeline.runner import CycleOutcome
from meet_agent.pipeline.session import ConnectionSession


class _FakeRunner:
    def __init__(self, *, replied: bool = True) -> None:
        self.replied = replied
        self.blobs: list[bytes] = []
        self.greetings = 0
        self.release = asyncio.Event()
        self.release.set()

    async def run_cycle(self, conversation, send, audio: bytes) -> CycleOutcome:
        self.blobs.append(audio)
        if self.replied:
            conversation.is_speaking = True
        await self.release.wait()
        return CycleOutcome(transcript="text", replied=self.replied)

    async def greet(self, conversation, send) -> CycleOutcome:
        self.greetings += 1
        conversation.is_speaking = True
        await self.release.wait()
        return CycleOutcome(transcript="", replied=True)


async def _send(_message: dict[str, Any]) -> bool:
    return True


def _session(runner: _FakeRunner, *, flush_idle_s: float = 5.0, on_cycle_complete=None) -> ConnectionSession:
    return ConnectionSession(
        session_id="s1",
        runner=runner,
        send=_send,
        flush_size_bytes=1000,
        min_utterance_bytes=100,
        flush_idle_s=flush_idle_s,
        history_turns=10,
        on_cycle_complete=on_cycle_complete,
    )


@pytest.mark.asyncio
async def test_size_threshold_starts_a_cycle_immediately() -> None:
    runner = _FakeRunner()
    session = _session(runner)

    session.feed(b"\x00" * 600)
    assert session.timer_armed
    session.feed(b"\x00" * 400)
    assert session.busy
    assert not session.timer_armed

    await session.wait_idle()
    assert runner.blobs == [b"\x00" * 1000]
    await session.close()


@pytest.mark.asyncio
async def test_idle_timer_flushes_after_silence() -> None:
    runner = _FakeRunner()
    session = _session(runner, flush_idle_s=0.05)

    session.feed(b"\x01" * 200)
    await asyncio.sleep(0.03)
    session.feed(b"\x02" * 200)
    await asyncio.sleep(0.03)
    # Each frame restarts the idle timer.
    assert runner.blobs == []

    await asyncio.sleep(0.1)
    await session.wait_idle()
    assert runner.blobs == [b"\x01" * 200 + b"\x02" * 200]
    await session.close()


@pytest.mark.asyncio
async def test_short_utterance_never_reaches_the_runner() -> None:
    runner = _FakeRunner()
    session = _session(runner, flush_idle_s=0.02)

    session.feed(b"\x00" * 50)
    await asyncio.sleep(0.08)

    assert runner.blobs == []
    assert session.ingest.state is IngestState.IDLE
    await session.close()


@pytest.mark.asyncio
async def test_only_one_cycle_in_flight() -> None:
    runner = _FakeRunner(replied=False)
    runner.release.clear()
    session = _session(runner)

    session.feed(b"\x00" * 1000)
    await asyncio.sleep(0)
    session.feed(b"\x00" * 1000)
    session.feed(b"\x00" * 1000)
    assert session.flush() is False
    assert len(runner.blobs) == 1

    await session.close()


@pytest.mark.asyncio
async def test_audio_heard_during_a_reply_is_dropped() -> None:
    runner = _FakeRunner(replied=True)
    runner.release.clear()
    session = _session(runner)

    session.feed(b"\x00" * 1000)
    await asyncio.sleep(0)
    assert session.conversation.is_speaking

    # Echo of our own voice while speaking.
    session.feed(b"\x00" * 500)
    assert session.ingest.pending_bytes == 0

    runner.release.set()
    await session.wait_idle()
    assert not session.conversation.is_speaking
    assert session.ingest.state is IngestState.IDLE
    assert len(runner.blobs) == 1
    await session.close()


@pytest.mark.asyncio
async def test_audio_kept_when_no_reply_is_spoken() -> None:
    runner = _FakeRunner(replied=False)
    runner.release.clear()
    outcomes: list[CycleOutcome] = []
    session = _session(runner, flush_idle_s=0.02, on_cycle_complete=lambda _s, o: outcomes.append(o))

    session.feed(b"\x00" * 1000)
    await asyncio.sleep(0)
    session.feed(b"\x03" * 300)
    runner.release.set()
    await session.wait_idle()
    assert session.timer_armed

    await asyncio.sleep(0.08)
    await session.wait_idle()
    assert runner.blobs[1] == b"\x03" * 300
    assert len(outcomes) == 2
    await session.close()


@pytest.mark.asyncio
async def test_greeting_runs_as_a_cycle() -> None:
    runner = _FakeRunner()
    runner.release.clear()
    session = _session(runner)

    assert session.greet() is True
    assert session.greet() is False
    await asyncio.sleep(0)
    session.feed(b"\x00" * 300)
    assert session.ingest.pending_bytes == 0

    runner.release.set()
    await session.wait_idle()
    assert runner.greetings == 1
    assert not session.conversation.is_speaking
    await session.close()


@pytest.mark.asyncio
async def test_close_cancels_the_running_cycle() -> None:
    runner = _FakeRunner()
    runner.release.clear()
    session = _session(runner)

    session.feed(b"\x00" * 1000)
    await asyncio.sleep(0)
    assert session.busy

    await session.close()
    assert not session.busy
    assert not session.conversation.is_speaking
    assert session.ingest.state is IngestState.IDLE

    session.feed(b"\x00" * 1000)
    assert not session.busy
