"""Minimal RIFF/WAVE container helpers for PCM16 mono audio."""

from __future__ import annotations

import io
import wave

from meet_agent.config.audio import WAV_HEADER_BYTES, PCM16_SAMPLE_WIDTH


def pcm16_to_wav(pcm: bytes, sample_rate_hz: int) -> bytes:
    """Wrap raw PCM16 mono samples in a canonical 44-byte-header WAV file."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(PCM16_SAMPLE_WIDTH)
        wav.setframerate(int(sample_rate_hz))
        wav.writeframes(pcm)
    return buf.getvalue()


def wav_to_pcm16(container: bytes) -> bytes:
    """Strip the fixed-size WAV header and return the raw samples.

    The synthesizer returns canonical PCM WAV files, so the header is always
    44 bytes; anything without a RIFF marker is returned untouched.
    """
    if len(container) < WAV_HEADER_BYTES or container[:4] != b"RIFF" or container[8:12] != b"WAVE":
        return container
    return container[WAV_HEADER_BYTES:]


__all__ = ["pcm16_to_wav", "wav_to_pcm16"]
