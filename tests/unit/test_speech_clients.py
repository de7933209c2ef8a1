from __future__ import annotations

import base64

import httpx
import orjson
import pytest

from meet_agent.audio.wav import pcm16_to_wav
from meet_agent.speech.credentials import GoogleCredentials
from meet_agent.errors import SynthesisError, RecognitionError
from meet_agent.speech.recognizer import SpeechRecognizer, join_transcripts
from meet_agent.speech.synthesizer import SpeechSynthesizer


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _recognizer(client: httpx.AsyncClient, timeout_s: float = 0.0) -> SpeechRecognizer:
    return SpeechRecognizer(
        client=client,
        credentials=GoogleCredentials(client=client, api_key="k"),
        language_code="ja-JP",
        sample_rate_hz=16000,
        timeout_s=timeout_s,
    )


def _synthesizer(client: httpx.AsyncClient, timeout_s: float = 0.0) -> SpeechSynthesizer:
    return SpeechSynthesizer(
        client=client,
        credentials=GoogleCredentials(client=client, api_key="k"),
        language_code="ja-JP",
        voice_name="ja-JP-Neural2-B",
        sample_rate_hz=16000,
        timeout_s=timeout_s,
    )


def test_join_transcripts_concatenates_top_alternatives() -> None:
    response = {
        "results": [
            {"alternatives": [{"transcript": "こんにちは"}, {"transcript": "今日は"}]},
            {"alternatives": []},
            {"alternatives": [{"transcript": "元気ですか "}]},
        ]
    }
    assert join_transcripts(response) == "こんにちは元気ですか"
    assert join_transcripts({}) == ""


@pytest.mark.asyncio
async def test_transcribe_posts_wav_and_language_hint() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"results": [{"alternatives": [{"transcript": "はい"}]}]})

    pcm = b"\x00\x01" * 100
    async with _client(handler) as client:
        text = await _recognizer(client).transcribe(pcm)

    assert text == "はい"
    request = seen[0]
    assert request.url.params["key"] == "k"
    body = orjson.loads(request.content)
    assert body["config"]["languageCode"] == "ja-JP"
    assert base64.b64decode(body["audio"]["content"]) == pcm16_to_wav(pcm, 16000)


@pytest.mark.asyncio
async def test_transcribe_without_speech_returns_empty() -> None:
    async with _client(lambda request: httpx.Response(200, json={})) as client:
        assert await _recognizer(client).transcribe(b"\x00\x00" * 10) == ""


@pytest.mark.asyncio
async def test_transcribe_http_error_raises() -> None:
    async with _client(lambda request: httpx.Response(403, text="denied")) as client:
        with pytest.raises(RecognitionError, match="403"):
            await _recognizer(client).transcribe(b"\x00\x00" * 10)


@pytest.mark.asyncio
async def test_synthesize_strips_the_wav_header() -> None:
    pcm = b"\x05\x06" * 64
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        content = base64.b64encode(pcm16_to_wav(pcm, 16000)).decode("ascii")
        return httpx.Response(200, json={"audioContent": content})

    async with _client(handler) as client:
        out = await _synthesizer(client).synthesize("こんにちは。")

    assert out == pcm
    body = orjson.loads(seen[0].content)
    assert body["input"] == {"text": "こんにちは。"}
    assert body["voice"]["name"] == "ja-JP-Neural2-B"
    assert body["audioConfig"] == {"audioEncoding": "LINEAR16", "sampleRateHertz": 16000}


@pytest.mark.asyncio
async def test_synthesize_rejects_empty_text() -> None:
    async with _client(lambda request: httpx.Response(500)) as client:
        with pytest.raises(ValueError):
            await _synthesizer(client).synthesize("   ")


@pytest.mark.asyncio
async def test_synthesize_missing_audio_raises() -> None:
    async with _client(lambda request: httpx.Response(200, json={})) as client:
        with pytest.raises(SynthesisError):
            await _synthesizer(client).synthesize("はい。")


@pytest.mark.asyncio
async def test_synthesize_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    async with _client(handler) as client:
        with pytest.raises(SynthesisError):
            await _synthesizer(client).synthesize("はい。")


@pytest.mark.asyncio
async def test_request_timeouts_follow_configured_seconds() -> None:
    seen: list[httpx.Request] = []
    content = base64.b64encode(pcm16_to_wav(b"\x00\x00", 16000)).decode("ascii")

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"audioContent": content, "results": []})

    async with _client(handler) as client:
        await _recognizer(client, timeout_s=4.0).transcribe(b"\x00\x00" * 10)
        await _synthesizer(client, timeout_s=7.5).synthesize("はい。")
        await _synthesizer(client, timeout_s=0).synthesize("はい。")

    assert seen[0].extensions["timeout"]["read"] == 4.0
    assert seen[1].extensions["timeout"]["read"] == 7.5
    assert seen[2].extensions["timeout"]["read"] is None
