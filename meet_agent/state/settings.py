"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    openai_api_key: str
    google_api_key: str
    google_client_id: str
    google_client_secret: str
    google_refresh_token: str

    @property
    def google_oauth_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret and self.google_refresh_token)


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class AudioSettings:
    input_sample_rate_hz: int
    flush_size_bytes: int
    min_utterance_bytes: int
    flush_idle_s: float


@dataclass(frozen=True, slots=True)
class RecognizerSettings:
    language_code: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class SynthesizerSettings:
    language_code: str
    voice_name: str
    sample_rate_hz: int
    timeout_s: float


@dataclass(frozen=True, slots=True)
class LlmSettings:
    model: str
    max_tokens: int
    temperature: float
    history_turns: int
    persona_prompt: str
    fallback_reply: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class PipelineSettings:
    trigger_words: tuple[str, ...]
    greeting_enabled: bool
    greeting_instruction: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    audio: AudioSettings
    recognizer: RecognizerSettings
    synthesizer: SynthesizerSettings
    llm: LlmSettings
    pipeline: PipelineSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "AuthSettings",
    "LimitsSettings",
    "LlmSettings",
    "PipelineSettings",
    "RecognizerSettings",
    "SynthesizerSettings",
    "WebSocketSettings",
]
