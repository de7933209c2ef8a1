"""Audio ingest configuration (env names and defaults only)."""

from __future__ import annotations

ENV_INPUT_SAMPLE_RATE_HZ = "INPUT_SAMPLE_RATE_HZ"
ENV_FLUSH_SIZE_BYTES = "FLUSH_SIZE_BYTES"
ENV_MIN_UTTERANCE_BYTES = "MIN_UTTERANCE_BYTES"
ENV_FLUSH_IDLE_S = "FLUSH_IDLE_S"

# The bot page captures PCM16 mono at 16kHz.
DEFAULT_INPUT_SAMPLE_RATE_HZ: int = 16000
PCM16_SAMPLE_WIDTH: int = 2

# Size trigger: ~5s of 16kHz PCM16.
DEFAULT_FLUSH_SIZE_BYTES: int = 160000

# Anything shorter than ~0.5s is treated as noise.
DEFAULT_MIN_UTTERANCE_BYTES: int = 16000

# Idle trigger: debounce reset on every accepted frame.
DEFAULT_FLUSH_IDLE_S: float = 2.0

# RIFF/WAVE header size for canonical PCM files.
WAV_HEADER_BYTES: int = 44

__all__ = [
    "DEFAULT_FLUSH_IDLE_S",
    "DEFAULT_FLUSH_SIZE_BYTES",
    "DEFAULT_INPUT_SAMPLE_RATE_HZ",
    "DEFAULT_MIN_UTTERANCE_BYTES",
    "ENV_FLUSH_IDLE_S",
    "ENV_FLUSH_SIZE_BYTES",
    "ENV_INPUT_SAMPLE_RATE_HZ",
    "ENV_MIN_UTTERANCE_BYTES",
    "PCM16_SAMPLE_WIDTH",
    "WAV_HEADER_BYTES",
]
