"""Configuration module exports (env names and defaults only)."""

from .audio import (
    DEFAULT_INPUT_SAMPLE_RATE_HZ,
)

__all__ = [
    "DEFAULT_INPUT_SAMPLE_RATE_HZ",
]
