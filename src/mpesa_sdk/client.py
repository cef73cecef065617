"""Base API client for the Daraja API.

Handles URL construction, bearer-token injection and status mapping.
Calls are made exactly once; there is no retry loop.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from mpesa_sdk.auth import AuthManager
from mpesa_sdk.config import Config
from mpesa_sdk.utils.errors import ApiError

logger = logging.getLogger(__name__)


class MpesaClient:
    """HTTP client for Daraja operation endpoints."""

    def __init__(
        self,
        config: Config,
        auth: AuthManager,
        verbose: bool = False,
    ) -> None:
        self._config = config
        self._auth = auth
        self._verbose = verbose
        self._http = httpx.Client(timeout=config.settings.timeout)

    @property
    def config(self) -> Config:
        return self._config

    def request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST).
            path: API path (e.g. "/mpesa/stkpush/v1/processrequest"). Appended to the environment host.
            body: JSON request body.
            params: Query parameters.

        Returns:
            The httpx.Response object.

        Raises:
            AuthenticationError: If no token could be obtained.
            ApiError: On a transport failure or a non-2xx status.
        """
        url = self._config.base_url + path
        headers = self._build_headers()

        if self._verbose:
            logger.info(f"{method} {url}")
            if body:
                logger.info(f"Body: {body}")

        try:
            response = self._http.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error calling {path}: {e}")
            raise ApiError(f"Request to {path} failed: {e}") from e

        if self._verbose:
            logger.info(f"Response: {response.status_code}")

        if not 200 <= response.status_code < 300:
            error_detail = response.text
            try:
                error_json = response.json()
                if isinstance(error_json, dict):
                    error_detail = error_json.get("errorMessage", error_json.get("ResponseDescription", response.text))
            except ValueError:
                pass
            logger.warning(f"{path} returned HTTP {response.status_code}: {error_detail}")
            raise ApiError(
                f"API error (HTTP {response.status_code}): {error_detail}",
                status_code=response.status_code,
                detail=str(error_detail),
            )

        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Convenience method for GET requests."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, body: dict[str, Any] | None = None, **kwargs: Any) -> httpx.Response:
        """Convenience method for POST requests."""
        return self.request("POST", path, body=body, **kwargs)

    def post_json(self, path: str, body: dict[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
        """POST and return the decoded JSON body.

        Raises:
            ApiError: If the 2xx body is not JSON.
        """
        response = self.post(path, body=body, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{path} returned HTTP {response.status_code} with a non-JSON body")
            raise ApiError(
                f"API error (HTTP {response.status_code}): response is not JSON",
                status_code=response.status_code,
                detail=response.text[:200],
            ) from e

    def _build_headers(self) -> dict[str, str]:
        """Build request headers with a valid bearer token."""
        token = self._auth.get_valid_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
        self._auth.close()
