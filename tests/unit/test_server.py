from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from meet_agent import server
from meet_agent.state import RuntimeDeps
from meet_agent.pipeline import PipelineBridge, PipelineRunner, ResponseGenerator
from meet_agent.handlers.sessions import SessionRegistry
from meet_agent.handlers.connections import ConnectionManager
from meet_agent.state.settings import (
    AppSettings,
    AuthSettings,
    LlmSettings,
    AudioSettings,
    LimitsSettings,
    PipelineSettings,
    WebSocketSettings,
    RecognizerSettings,
    SynthesizerSettings,
)

FLUSH_BYTES = 3200


class _Recognizer:
    async def transcribe(self, pcm: bytes) -> str:
        return "今日の議題は？"


class _Generator:
    async def stream_reply(self, history, user_text, *, instructions=None):
        for chunk in ["予算", "の確認です。"]:
            yield chunk


class _Synthesizer:
    async def synthesize(self, text: str) -> bytes:
        return b"\x00\x01" * 8


class _Closeable:
    def __init__(self) -> None:
        self.closed = False

    async def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.closed = True


def _settings(max_connections: int) -> AppSettings:
    return AppSettings(
        auth=AuthSettings("", "", "", "", ""),
        limits=LimitsSettings(max_concurrent_connections=max_connections),
        websocket=WebSocketSettings(idle_timeout_s=600.0, watchdog_tick_s=0.5, max_connection_duration_s=0.0),
        audio=AudioSettings(
            input_sample_rate_hz=16000,
            flush_size_bytes=FLUSH_BYTES,
            min_utterance_bytes=320,
            flush_idle_s=5.0,
        ),
        recognizer=RecognizerSettings(language_code="ja-JP", timeout_s=0.0),
        synthesizer=SynthesizerSettings(
            language_code="ja-JP",
            voice_name="ja-JP-Neural2-B",
            sample_rate_hz=16000,
            timeout_s=0.0,
        ),
        llm=LlmSettings(
            model="test",
            max_tokens=50,
            temperature=0.0,
            history_turns=10,
            persona_prompt="persona",
            fallback_reply="fallback",
            timeout_s=0.0,
        ),
        pipeline=PipelineSettings(trigger_words=(), greeting_enabled=False, greeting_instruction=""),
    )


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, request: pytest.FixtureRequest):
    max_connections = getattr(request, "param", 4)

    async def fake_build() -> RuntimeDeps:
        settings = _settings(max_connections)
        responder = ResponseGenerator(generator=_Generator(), synthesizer=_Synthesizer(), fallback_reply="fallback")
        runner = PipelineRunner(recognizer=_Recognizer(), responder=responder)
        return RuntimeDeps(
            connections=ConnectionManager(max_connections=max_connections),
            sessions=SessionRegistry(),
            pipeline_bridge=PipelineBridge(runner=runner, settings=settings),
            settings=settings,
            _http_client=_Closeable(),
            _openai_client=_Closeable(),
        )

    monkeypatch.setattr(server, "build_runtime_deps", fake_build)
    with TestClient(server.app) as test_client:
        yield test_client


def test_health_endpoints(client: TestClient) -> None:
    assert client.get("/").json() == {"status": "ok"}
    assert client.get("/healthz").json() == {"status": "ok"}
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["sessions"] == 0
    assert health["connections"]["capacity"] == 4


def test_ping_pong(client: TestClient) -> None:
    with client.websocket_connect("/ws/audio") as ws:
        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}


def test_audio_round_trip(client: TestClient) -> None:
    pcm = base64.b64encode(b"\x00\x00" * (FLUSH_BYTES // 2)).decode("ascii")
    with client.websocket_connect("/ws/audio") as ws:
        ws.send_text("garbage")
        ws.send_json({"type": "unknown"})
        ws.send_json({"type": "audio", "data": pcm})

        events = [ws.receive_json() for _ in range(4)]

    assert [e["type"] for e in events] == ["transcript", "response", "audio", "audio_done"]
    assert events[0]["text"] == "今日の議題は？"
    assert events[1]["text"] == "予算の確認です。"
    assert base64.b64decode(events[2]["data"]) == b"\x00\x01" * 8


@pytest.mark.parametrize("client", [1], indirect=True)
def test_connection_over_capacity_is_rejected(client: TestClient) -> None:
    with client.websocket_connect("/ws/audio") as first:
        first.send_json({"type": "ping"})
        assert first.receive_json() == {"type": "pong"}
        with client.websocket_connect("/ws/audio") as second:
            assert second.receive_json() == {"type": "error", "message": "server at capacity"}
