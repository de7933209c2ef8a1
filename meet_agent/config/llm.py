"""Language model configuration (env names and defaults only)."""

from __future__ import annotations

ENV_OPENAI_MODEL = "OPENAI_MODEL"
ENV_LLM_MAX_TOKENS = "LLM_MAX_TOKENS"
ENV_LLM_TEMPERATURE = "LLM_TEMPERATURE"
ENV_LLM_HISTORY_TURNS = "LLM_HISTORY_TURNS"
ENV_PERSONA_PROMPT_FILE = "PERSONA_PROMPT_FILE"

DEFAULT_OPENAI_MODEL: str = "gpt-4o-mini"
DEFAULT_LLM_MAX_TOKENS: int = 200
DEFAULT_LLM_TEMPERATURE: float = 0.7

# Only the most recent turns are sent with each request.
DEFAULT_LLM_HISTORY_TURNS: int = 10

DEFAULT_PERSONA_PROMPT: str = """あなたは会議に参加しているAIアシスタントです。

## 役割
- 参加者からの質問に簡潔かつ的確に回答してください
- 会議の流れを妨げないよう、回答は短く要点をまとめてください
- 専門用語は必要に応じて分かりやすく説明してください

## 制約
- 回答は音声で読み上げられるため、自然な日本語で話すように回答してください
- 箇条書きや記号は使わず、話し言葉で回答してください
- 回答は短く、20秒以内で話せる長さにしてください
- 分からないことは正直に「分かりません」と答えてください"""

# Committed (and spoken) when the model stream yields no text at all.
FALLBACK_REPLY_TEXT: str = "すみません、応答できませんでした。"

__all__ = [
    "DEFAULT_LLM_HISTORY_TURNS",
    "DEFAULT_LLM_MAX_TOKENS",
    "DEFAULT_LLM_TEMPERATURE",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_PERSONA_PROMPT",
    "ENV_LLM_HISTORY_TURNS",
    "ENV_LLM_MAX_TOKENS",
    "ENV_LLM_TEMPERATURE",
    "ENV_OPENAI_MODEL",
    "ENV_PERSONA_PROMPT_FILE",
    "FALLBACK_REPLY_TEXT",
]
