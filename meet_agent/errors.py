"""Shared error types for the meeting voice pipeline."""

from __future__ import annotations


class UpstreamServiceError(Exception):
    """Raised when a remote speech or language service call fails.

    These are recoverable: the current reply cycle aborts and the session
    stays usable for the next utterance.
    """

    service: str = "upstream"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.service}: {detail}")
        self.detail = detail


class CredentialsError(UpstreamServiceError):
    service = "credentials"


class RecognitionError(UpstreamServiceError):
    service = "recognizer"


class GenerationError(UpstreamServiceError):
    service = "generator"


class SynthesisError(UpstreamServiceError):
    service = "synthesizer"


__all__ = ["CredentialsError", "GenerationError", "RecognitionError", "SynthesisError", "UpstreamServiceError"]
