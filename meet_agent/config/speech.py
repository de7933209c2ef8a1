"""Speech-to-text and text-to-speech configuration (env names and defaults only)."""

from __future__ import annotations

ENV_STT_LANGUAGE_CODE = "STT_LANGUAGE_CODE"
ENV_TTS_LANGUAGE_CODE = "TTS_LANGUAGE_CODE"
ENV_TTS_VOICE_NAME = "TTS_VOICE_NAME"
ENV_TTS_SAMPLE_RATE_HZ = "TTS_SAMPLE_RATE_HZ"
ENV_UPSTREAM_TIMEOUT_S = "UPSTREAM_TIMEOUT_S"

DEFAULT_STT_LANGUAGE_CODE: str = "ja-JP"
DEFAULT_TTS_LANGUAGE_CODE: str = "ja-JP"
DEFAULT_TTS_VOICE_NAME: str = "ja-JP-Neural2-B"

# Must match the bot page playback context.
DEFAULT_TTS_SAMPLE_RATE_HZ: int = 16000

# Upstream calls run to their own completion unless a timeout is configured.
DEFAULT_UPSTREAM_TIMEOUT_S: float = 0.0

GOOGLE_STT_URL: str = "https://speech.googleapis.com/v1/speech:recognize"
GOOGLE_TTS_URL: str = "https://texttospeech.googleapis.com/v1/text:synthesize"
GOOGLE_TOKEN_URL: str = "https://oauth2.googleapis.com/token"

# Cached access tokens are refreshed this long before Google says they expire.
TOKEN_EXPIRY_MARGIN_S: float = 60.0

__all__ = [
    "DEFAULT_STT_LANGUAGE_CODE",
    "DEFAULT_TTS_LANGUAGE_CODE",
    "DEFAULT_TTS_SAMPLE_RATE_HZ",
    "DEFAULT_TTS_VOICE_NAME",
    "DEFAULT_UPSTREAM_TIMEOUT_S",
    "ENV_STT_LANGUAGE_CODE",
    "ENV_TTS_LANGUAGE_CODE",
    "ENV_TTS_SAMPLE_RATE_HZ",
    "ENV_TTS_VOICE_NAME",
    "ENV_UPSTREAM_TIMEOUT_S",
    "GOOGLE_STT_URL",
    "GOOGLE_TOKEN_URL",
    "GOOGLE_TTS_URL",
    "TOKEN_EXPIRY_MARGIN_S",
]
