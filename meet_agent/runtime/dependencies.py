"""Runtime dependency construction (upstream clients + admission control)."""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI

from meet_agent.state import RuntimeDeps
from meet_agent.llm import ReplyGenerator
from meet_agent.state.settings import AppSettings
from meet_agent.handlers.sessions import SessionRegistry
from meet_agent.handlers.connections import ConnectionManager
from meet_agent.speech import GoogleCredentials, SpeechRecognizer, SpeechSynthesizer
from meet_agent.pipeline import PipelineBridge, PipelineRunner, ResponseGenerator

from .settings_loader import load_settings, missing_credentials

logger = logging.getLogger(__name__)


def _timeout(seconds: float) -> float | None:
    # 0 disables the timeout; upstream calls run to completion.
    return seconds if seconds > 0 else None


def build_pipeline_runner(
    settings: AppSettings,
    *,
    http_client: httpx.AsyncClient,
    openai_client: AsyncOpenAI,
) -> PipelineRunner:
    auth = settings.auth
    credentials = GoogleCredentials(
        client=http_client,
        api_key=auth.google_api_key,
        client_id=auth.google_client_id,
        client_secret=auth.google_client_secret,
        refresh_token=auth.google_refresh_token,
    )
    recognizer = SpeechRecognizer(
        client=http_client,
        credentials=credentials,
        language_code=settings.recognizer.language_code,
        sample_rate_hz=settings.audio.input_sample_rate_hz,
        timeout_s=settings.recognizer.timeout_s,
    )
    synthesizer = SpeechSynthesizer(
        client=http_client,
        credentials=credentials,
        language_code=settings.synthesizer.language_code,
        voice_name=settings.synthesizer.voice_name,
        sample_rate_hz=settings.synthesizer.sample_rate_hz,
        timeout_s=settings.synthesizer.timeout_s,
    )
    generator = ReplyGenerator(
        client=openai_client,
        model=settings.llm.model,
        persona_prompt=settings.llm.persona_prompt,
        max_tokens=settings.llm.max_tokens,
        temperature=settings.llm.temperature,
    )
    responder = ResponseGenerator(
        generator=generator,
        synthesizer=synthesizer,
        fallback_reply=settings.llm.fallback_reply,
    )
    return PipelineRunner(
        recognizer=recognizer,
        responder=responder,
        trigger_words=settings.pipeline.trigger_words,
        greeting_instruction=settings.pipeline.greeting_instruction,
    )


async def build_runtime_deps() -> RuntimeDeps:
    settings: AppSettings = load_settings()

    missing = missing_credentials(settings)
    if missing:
        # Startup still succeeds; every cycle will fail upstream until these are set.
        logger.warning("runtime: missing credentials: %s", ", ".join(missing))

    http_client = httpx.AsyncClient()
    openai_client = AsyncOpenAI(
        api_key=settings.auth.openai_api_key or None,
        timeout=_timeout(settings.llm.timeout_s),
    )

    runner = build_pipeline_runner(settings, http_client=http_client, openai_client=openai_client)
    pipeline_bridge = PipelineBridge(runner=runner, settings=settings)

    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)
    logger.info(
        "runtime: model=%s voice=%s max_connections=%s",
        settings.llm.model,
        settings.synthesizer.voice_name,
        settings.limits.max_concurrent_connections,
    )

    return RuntimeDeps(
        connections=connections,
        sessions=SessionRegistry(),
        pipeline_bridge=pipeline_bridge,
        settings=settings,
        _http_client=http_client,
        _openai_client=openai_client,
    )


__all__ = ["RuntimeDeps", "build_pipeline_runner", "build_runtime_deps"]
