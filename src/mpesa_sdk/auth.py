"""OAuth access tokens for the Daraja API.

Handles client-credentials token fetch, caching, and expiry tracking.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta

import httpx

from mpesa_sdk.config import Config
from mpesa_sdk.models.auth import CachedToken, TokenResponse, TokenStatus
from mpesa_sdk.utils.credentials import basic_auth_header
from mpesa_sdk.utils.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/v1/generate"

# Buffer before expiry to trigger refresh
EXPIRY_BUFFER = timedelta(seconds=60)


class AuthManager:
    """Manages client-credentials access tokens for one set of app keys."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._cached: CachedToken | None = None
        self._lock = threading.Lock()
        self._http = httpx.Client(timeout=config.settings.timeout)

    def get_valid_token(self, force_refresh: bool = False) -> str:
        """Get a valid access token, fetching a new one if needed.

        Concurrent callers that find the cache stale wait on one fetch
        instead of each issuing their own.

        Args:
            force_refresh: Fetch a new token even if the cached one is valid.

        Returns:
            A valid access token string.

        Raises:
            AuthenticationError: If the token endpoint fails. The cache is cleared.
        """
        cached = self._cached
        if not force_refresh and self._is_fresh(cached):
            return cached.token  # type: ignore[union-attr]

        with self._lock:
            cached = self._cached
            if not force_refresh and self._is_fresh(cached):
                return cached.token  # type: ignore[union-attr]
            return self._fetch().access_token

    def get_access_token(self) -> TokenResponse:
        """Fetch a new token from the vendor, bypassing the cache.

        The new token replaces whatever was cached.
        """
        with self._lock:
            return self._fetch()

    def get_status(self) -> TokenStatus:
        """Get the current token status."""
        cached = self._cached
        if cached is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = datetime.now()
        is_expired = now > cached.expires_at
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = int((cached.expires_at - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            expires_at=cached.expires_at,
            seconds_remaining=seconds_remaining,
        )

    def clear(self) -> None:
        """Drop the cached token."""
        self._cached = None

    @staticmethod
    def _is_fresh(cached: CachedToken | None) -> bool:
        """Check if a token is valid with a safety buffer."""
        if cached is None:
            return False
        return cached.expires_at > datetime.now() + EXPIRY_BUFFER

    def _fetch(self) -> TokenResponse:
        """Call the token endpoint and replace the cache. Caller holds the lock."""
        settings = self._config.settings
        now = datetime.now()

        try:
            response = self._http.get(
                self._config.base_url + TOKEN_PATH,
                params={"grant_type": "client_credentials"},
                headers={
                    "Authorization": basic_auth_header(settings.consumer_key, settings.consumer_secret),
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            self._cached = None
            raise AuthenticationError(f"Failed to get access token: {e}") from e

        if not 200 <= response.status_code < 300:
            self._cached = None
            error_detail = response.text
            try:
                error_json = response.json()
                if isinstance(error_json, dict):
                    error_detail = error_json.get("errorMessage", error_json.get("error_description", response.text))
            except ValueError:
                pass
            raise AuthenticationError(
                f"Failed to get access token (HTTP {response.status_code}): {error_detail}",
                status_code=response.status_code,
            )

        try:
            token_data = TokenResponse(**response.json())
        except ValueError as e:
            self._cached = None
            raise AuthenticationError(f"Failed to get access token: unreadable response ({e})") from e

        self._cached = CachedToken(
            token=token_data.access_token,
            expires_at=now + timedelta(seconds=token_data.expires_in),
        )
        logger.info(f"Fetched access token, expires in {token_data.expires_in}s")
        return token_data

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
