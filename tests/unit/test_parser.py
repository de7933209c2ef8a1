from __future__ import annotations

import base64

import orjson
import pytest

from meet_agent.handlers.websocket.parser import decode_audio, parse_client_message


def test_parse_client_message_ok() -> None:
    raw = orjson.dumps({"type": " audio ", "data": "AAA="})
    msg = parse_client_message(raw)
    assert msg["type"] == "audio"
    assert msg["data"] == "AAA="


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"data": "AAA="}',
        '{"type": ""}',
        '{"type": 3}',
    ],
)
def test_parse_client_message_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_client_message(raw)


def test_decode_audio_returns_pcm_bytes() -> None:
    pcm = b"\x01\x02" * 10
    msg = {"type": "audio", "data": base64.b64encode(pcm).decode("ascii")}
    assert decode_audio(msg) == pcm


@pytest.mark.parametrize(
    "msg",
    [
        {"type": "ping"},
        {"type": "audio"},
        {"type": "audio", "data": 12},
        {"type": "audio", "data": "!!not base64!!"},
        {"type": "audio", "data": base64.b64encode(b"\x01\x02\x03").decode("ascii")},
    ],
)
def test_decode_audio_rejects_bad_payloads(msg: dict) -> None:
    with pytest.raises(ValueError):
        decode_audio(msg)
