"""Secrets and credential configuration (env names only)."""

from __future__ import annotations

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_GOOGLE_CLOUD_API_KEY = "GOOGLE_CLOUD_API_KEY"

# OAuth refresh-token credentials, used instead of the API key when set.
ENV_GOOGLE_OAUTH_CLIENT_ID = "GOOGLE_OAUTH_CLIENT_ID"
ENV_GOOGLE_OAUTH_CLIENT_SECRET = "GOOGLE_OAUTH_CLIENT_SECRET"
ENV_GOOGLE_OAUTH_REFRESH_TOKEN = "GOOGLE_OAUTH_REFRESH_TOKEN"

__all__ = [
    "ENV_GOOGLE_CLOUD_API_KEY",
    "ENV_GOOGLE_OAUTH_CLIENT_ID",
    "ENV_GOOGLE_OAUTH_CLIENT_SECRET",
    "ENV_GOOGLE_OAUTH_REFRESH_TOKEN",
    "ENV_OPENAI_API_KEY",
]
