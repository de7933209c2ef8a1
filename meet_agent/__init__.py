"""Realtime voice pipeline for a meeting bot (STT -> LLM -> TTS over WebSocket)."""

__version__ = "0.1.0"
