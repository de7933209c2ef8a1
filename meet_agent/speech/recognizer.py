"""One-shot speech recognition via Google Cloud Speech-to-Text."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from meet_agent.audio.wav import pcm16_to_wav
from meet_agent.errors import RecognitionError
from meet_agent.config.speech import GOOGLE_STT_URL

from .credentials import GoogleCredentials

logger = logging.getLogger(__name__)


def join_transcripts(response: dict[str, Any]) -> str:
    """Concatenate the top alternative of every result segment."""
    parts: list[str] = []
    for result in response.get("results") or []:
        alternatives = result.get("alternatives") or []
        if not alternatives:
            continue
        transcript = alternatives[0].get("transcript")
        if isinstance(transcript, str):
            parts.append(transcript)
    return "".join(parts).strip()


class SpeechRecognizer:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        credentials: GoogleCredentials,
        language_code: str,
        sample_rate_hz: int,
        timeout_s: float = 0.0,
        url: str = GOOGLE_STT_URL,
    ) -> None:
        self._client = client
        self._credentials = credentials
        self._language_code = language_code
        self._sample_rate_hz = int(sample_rate_hz)
        # 0 disables the per-request timeout.
        self._timeout = httpx.Timeout(timeout_s if timeout_s > 0 else None)
        self._url = url

    async def transcribe(self, pcm: bytes) -> str:
        """Return the best-effort transcript of `pcm`, or "" if no speech was found."""
        # WAV is self-describing, so encoding and rate are left to auto-detection.
        container = pcm16_to_wav(pcm, self._sample_rate_hz)
        body = {
            "config": {
                "languageCode": self._language_code,
                "enableAutomaticPunctuation": True,
            },
            "audio": {"content": base64.b64encode(container).decode("ascii")},
        }
        headers, params = await self._credentials.request_auth()

        try:
            resp = await self._client.post(
                self._url, json=body, headers=headers, params=params, timeout=self._timeout
            )
        except httpx.HTTPError as exc:
            raise RecognitionError(f"request failed: {exc}") from exc
        if resp.status_code >= 400:
            raise RecognitionError(f"HTTP {resp.status_code}: {resp.text[:200]}")

        text = join_transcripts(resp.json())
        logger.debug("recognized %d bytes -> %d chars", len(pcm), len(text))
        return text


__all__ = ["SpeechRecognizer", "join_transcripts"]
