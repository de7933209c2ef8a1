"""Sentence-at-a-time speech synthesis via Google Cloud Text-to-Speech."""

from __future__ import annotations

import base64
import logging
import binascii

import httpx

from meet_agent.audio.wav import wav_to_pcm16
from meet_agent.errors import SynthesisError
from meet_agent.config.speech import GOOGLE_TTS_URL

from .credentials import GoogleCredentials

logger = logging.getLogger(__name__)


class SpeechSynthesizer:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        credentials: GoogleCredentials,
        language_code: str,
        voice_name: str,
        sample_rate_hz: int,
        timeout_s: float = 0.0,
        url: str = GOOGLE_TTS_URL,
    ) -> None:
        self._client = client
        self._credentials = credentials
        self._language_code = language_code
        self._voice_name = voice_name
        self._sample_rate_hz = int(sample_rate_hz)
        # 0 disables the per-request timeout.
        self._timeout = httpx.Timeout(timeout_s if timeout_s > 0 else None)
        self._url = url

    async def synthesize(self, text: str) -> bytes:
        """Return raw PCM16 mono samples for `text` (container header stripped)."""
        if not text.strip():
            raise ValueError("text must be non-empty")

        body = {
            "input": {"text": text},
            "voice": {"languageCode": self._language_code, "name": self._voice_name},
            "audioConfig": {"audioEncoding": "LINEAR16", "sampleRateHertz": self._sample_rate_hz},
        }
        try:
            headers, params = await self._credentials.request_auth()
            resp = await self._client.post(
                self._url, json=body, headers=headers, params=params, timeout=self._timeout
            )
        except httpx.HTTPError as exc:
            raise SynthesisError(f"request failed: {exc}") from exc
        if resp.status_code >= 400:
            raise SynthesisError(f"HTTP {resp.status_code}: {resp.text[:200]}")

        content = resp.json().get("audioContent")
        if not isinstance(content, str) or not content:
            raise SynthesisError("response missing audioContent")
        try:
            container = base64.b64decode(content)
        except (binascii.Error, ValueError) as exc:
            raise SynthesisError(f"invalid audioContent: {exc}") from exc

        pcm = wav_to_pcm16(container)
        logger.debug("synthesized %d chars -> %d bytes", len(text), len(pcm))
        return pcm


__all__ = ["SpeechSynthesizer"]
