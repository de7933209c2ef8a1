"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ENV_SHOW_HTTP_LOGS = "SHOW_HTTP_LOGS"

# Client libraries that log every request at INFO.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "openai")

__all__ = ["ENV_SHOW_HTTP_LOGS", "LOG_FORMAT", "LOG_LEVEL", "NOISY_LOGGERS"]
