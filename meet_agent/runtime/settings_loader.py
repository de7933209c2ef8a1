"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
import logging
from pathlib import Path

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
from meet_agent.config.secrets import (
    ENV_OPENAI_API_KEY,
    ENV_GOOGLE_CLOUD_API_KEY,
    ENV_GOOGLE_OAUTH_CLIENT_ID,
    ENV_GOOGLE_OAUTH_CLIENT_SECRET,
    ENV_GOOGLE_OAUTH_REFRESH_TOKEN,
)
from meet_agent.config.audio import (
    ENV_FLUSH_IDLE_S,
    ENV_FLUSH_SIZE_BYTES,
    DEFAULT_FLUSH_IDLE_S,
    ENV_MIN_UTTERANCE_BYTES,
    DEFAULT_FLUSH_SIZE_BYTES,
    ENV_INPUT_SAMPLE_RATE_HZ,
    DEFAULT_MIN_UTTERANCE_BYTES,
    DEFAULT_INPUT_SAMPLE_RATE_HZ,
)
from meet_agent.config.llm import (
    ENV_OPENAI_MODEL,
    ENV_LLM_MAX_TOKENS,
    FALLBACK_REPLY_TEXT,
    ENV_LLM_TEMPERATURE,
    DEFAULT_OPENAI_MODEL,
    ENV_LLM_HISTORY_TURNS,
    DEFAULT_LLM_MAX_TOKENS,
    DEFAULT_PERSONA_PROMPT,
    ENV_PERSONA_PROMPT_FILE,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_LLM_HISTORY_TURNS,
)
from meet_agent.config.speech import (
    ENV_TTS_VOICE_NAME,
    ENV_STT_LANGUAGE_CODE,
    ENV_TTS_LANGUAGE_CODE,
    ENV_TTS_SAMPLE_RATE_HZ,
    ENV_UPSTREAM_TIMEOUT_S,
    DEFAULT_TTS_VOICE_NAME,
    DEFAULT_STT_LANGUAGE_CODE,
    DEFAULT_TTS_LANGUAGE_CODE,
    DEFAULT_TTS_SAMPLE_RATE_HZ,
    DEFAULT_UPSTREAM_TIMEOUT_S,
)
from meet_agent.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from meet_agent.config.pipeline import (
    ENV_GREETING_ENABLED,
    GREETING_INSTRUCTION,
    ENV_REPLY_TRIGGER_WORDS,
    DEFAULT_GREETING_ENABLED,
    DEFAULT_REPLY_TRIGGER_WORDS,
)
from meet_agent.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS

logger = logging.getLogger(__name__)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _load_persona_prompt() -> str:
    path_raw = (os.getenv(ENV_PERSONA_PROMPT_FILE) or "").strip()
    if not path_raw:
        return DEFAULT_PERSONA_PROMPT
    path = Path(path_raw).expanduser()
    try:
        prompt = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ValueError(f"{ENV_PERSONA_PROMPT_FILE} could not be read: {exc}") from exc
    if not prompt:
        raise ValueError(f"{ENV_PERSONA_PROMPT_FILE} points at an empty file: {path}")
    return prompt


def _load_auth_settings() -> AuthSettings:
    return AuthSettings(
        openai_api_key=_str_env(ENV_OPENAI_API_KEY, ""),
        google_api_key=_str_env(ENV_GOOGLE_CLOUD_API_KEY, ""),
        google_client_id=_str_env(ENV_GOOGLE_OAUTH_CLIENT_ID, ""),
        google_client_secret=_str_env(ENV_GOOGLE_OAUTH_CLIENT_SECRET, ""),
        google_refresh_token=_str_env(ENV_GOOGLE_OAUTH_REFRESH_TOKEN, ""),
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(1, max_connections))


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=max(0.1, _float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S)),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def _load_audio_settings() -> AudioSettings:
    sample_rate = _int_env(ENV_INPUT_SAMPLE_RATE_HZ, DEFAULT_INPUT_SAMPLE_RATE_HZ)
    flush_size = _int_env(ENV_FLUSH_SIZE_BYTES, DEFAULT_FLUSH_SIZE_BYTES)
    min_bytes = _int_env(ENV_MIN_UTTERANCE_BYTES, DEFAULT_MIN_UTTERANCE_BYTES)
    flush_idle = _float_env(ENV_FLUSH_IDLE_S, DEFAULT_FLUSH_IDLE_S)
    if sample_rate <= 0:
        raise ValueError(f"{ENV_INPUT_SAMPLE_RATE_HZ} must be positive")
    if flush_size <= min_bytes:
        raise ValueError(f"{ENV_FLUSH_SIZE_BYTES} must be larger than {ENV_MIN_UTTERANCE_BYTES}")
    if flush_idle <= 0:
        flush_idle = DEFAULT_FLUSH_IDLE_S
    return AudioSettings(
        input_sample_rate_hz=sample_rate,
        flush_size_bytes=flush_size,
        min_utterance_bytes=max(0, min_bytes),
        flush_idle_s=flush_idle,
    )


def _load_recognizer_settings() -> RecognizerSettings:
    return RecognizerSettings(
        language_code=_str_env(ENV_STT_LANGUAGE_CODE, DEFAULT_STT_LANGUAGE_CODE),
        timeout_s=max(0.0, _float_env(ENV_UPSTREAM_TIMEOUT_S, DEFAULT_UPSTREAM_TIMEOUT_S)),
    )


def _load_synthesizer_settings() -> SynthesizerSettings:
    return SynthesizerSettings(
        language_code=_str_env(ENV_TTS_LANGUAGE_CODE, DEFAULT_TTS_LANGUAGE_CODE),
        voice_name=_str_env(ENV_TTS_VOICE_NAME, DEFAULT_TTS_VOICE_NAME),
        sample_rate_hz=_int_env(ENV_TTS_SAMPLE_RATE_HZ, DEFAULT_TTS_SAMPLE_RATE_HZ),
        timeout_s=max(0.0, _float_env(ENV_UPSTREAM_TIMEOUT_S, DEFAULT_UPSTREAM_TIMEOUT_S)),
    )


def _load_llm_settings() -> LlmSettings:
    return LlmSettings(
        model=_str_env(ENV_OPENAI_MODEL, DEFAULT_OPENAI_MODEL),
        max_tokens=max(1, _int_env(ENV_LLM_MAX_TOKENS, DEFAULT_LLM_MAX_TOKENS)),
        temperature=_float_env(ENV_LLM_TEMPERATURE, DEFAULT_LLM_TEMPERATURE),
        history_turns=max(0, _int_env(ENV_LLM_HISTORY_TURNS, DEFAULT_LLM_HISTORY_TURNS)),
        persona_prompt=_load_persona_prompt(),
        fallback_reply=FALLBACK_REPLY_TEXT,
        timeout_s=max(0.0, _float_env(ENV_UPSTREAM_TIMEOUT_S, DEFAULT_UPSTREAM_TIMEOUT_S)),
    )


def _load_pipeline_settings() -> PipelineSettings:
    return PipelineSettings(
        trigger_words=_list_env(ENV_REPLY_TRIGGER_WORDS, DEFAULT_REPLY_TRIGGER_WORDS),
        greeting_enabled=_bool_env(ENV_GREETING_ENABLED, DEFAULT_GREETING_ENABLED),
        greeting_instruction=GREETING_INSTRUCTION,
    )


def missing_credentials(settings: AppSettings) -> list[str]:
    missing: list[str] = []
    if not settings.auth.openai_api_key:
        missing.append(ENV_OPENAI_API_KEY)
    if not settings.auth.google_api_key and not settings.auth.google_oauth_configured:
        missing.append(f"{ENV_GOOGLE_CLOUD_API_KEY} (or {ENV_GOOGLE_OAUTH_REFRESH_TOKEN} + client id/secret)")
    return missing


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        audio=_load_audio_settings(),
        recognizer=_load_recognizer_settings(),
        synthesizer=_load_synthesizer_settings(),
        llm=_load_llm_settings(),
        pipeline=_load_pipeline_settings(),
    )


__all__ = ["load_settings", "missing_credentials"]
