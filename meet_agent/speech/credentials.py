"""Google Cloud request credentials with a cached OAuth access token."""

from __future__ import annotations

import time
import logging
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

import httpx

from meet_agent.errors import CredentialsError
from meet_agent.config.speech import GOOGLE_TOKEN_URL, TOKEN_EXPIRY_MARGIN_S

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


@dataclass(frozen=True, slots=True)
class AccessToken:
    token: str
    expires_at: float

    def is_fresh(self, now: float, margin_s: float) -> bool:
        return bool(self.token) and now < (self.expires_at - margin_s)


class GoogleCredentials:
    """Resolve auth for Google Cloud REST calls.

    A static API key is used as-is. With OAuth refresh-token credentials the
    access token is cached and refreshed lazily once it is within the expiry
    margin. One instance is shared by every connection in the process.
    Concurrent refreshes are harmless: each just replaces the cached token.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        api_key: str = "",
        client_id: str = "",
        client_secret: str = "",
        refresh_token: str = "",
        token_url: str = GOOGLE_TOKEN_URL,
        expiry_margin_s: float = TOKEN_EXPIRY_MARGIN_S,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._token_url = token_url
        self._margin_s = float(expiry_margin_s)
        self._now = now_fn or time.monotonic
        self._cached: AccessToken | None = None

    @property
    def uses_oauth(self) -> bool:
        return bool(self._client_id and self._client_secret and self._refresh_token)

    @property
    def cached_token(self) -> AccessToken | None:
        return self._cached

    async def request_auth(self) -> tuple[dict[str, str], dict[str, str]]:
        """Return (headers, query params) to attach to a Google API request."""
        if self.uses_oauth:
            token = await self.access_token()
            return {"Authorization": f"Bearer {token}"}, {}
        if self._api_key:
            return {}, {"key": self._api_key}
        raise CredentialsError("no Google Cloud credentials configured")

    async def access_token(self) -> str:
        cached = self._cached
        if cached is not None and cached.is_fresh(self._now(), self._margin_s):
            return cached.token
        self._cached = await self._refresh()
        return self._cached.token

    async def _refresh(self) -> AccessToken:
        try:
            resp = await self._client.post(
                self._token_url,
                data={
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "refresh_token": self._refresh_token,
                    "grant_type": "refresh_token",
                },
            )
        except httpx.HTTPError as exc:
            raise CredentialsError(f"token refresh failed: {exc}") from exc

        if resp.status_code in (400, 401):
            raise CredentialsError(f"refresh token rejected (HTTP {resp.status_code})")
        if resp.status_code >= 400:
            raise CredentialsError(f"token refresh failed (HTTP {resp.status_code})")

        data: dict[str, Any] = resp.json()
        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            raise CredentialsError("token response missing access_token")
        expires_in = float(data.get("expires_in") or 3600)
        logger.info("google access token refreshed (expires in %.0fs)", expires_in)
        return AccessToken(token=token, expires_at=self._now() + expires_in)


__all__ = ["AccessToken", "GoogleCredentials"]
