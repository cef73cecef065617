"""Customer-to-business service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.config import Environment
from mpesa_sdk.models.c2b import C2BSimulateRequest, UrlRegisterConfig

REGISTER_VERSIONS = ("v1", "v2")
SIMULATE_PATH = "/mpesa/c2b/v1/simulate"


class C2BService:
    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def register_urls(self, config: UrlRegisterConfig, version: str = "v2") -> dict[str, Any]:
        """Register the validation and confirmation URLs for a short code."""
        if version not in REGISTER_VERSIONS:
            raise ValueError(f"Unknown registerurl version '{version}'. Available: {', '.join(REGISTER_VERSIONS)}")
        return self._client.post_json(
            f"/mpesa/c2b/{version}/registerurl",
            body=config.model_dump(by_alias=True),
        )

    def simulate(self, request: C2BSimulateRequest) -> dict[str, Any]:
        """Simulate a customer payment to the configured short code (sandbox only)."""
        settings = self._client.config.settings
        if settings.environment != Environment.SANDBOX:
            raise ValueError("C2B simulation is only available in the sandbox environment")
        body = {"ShortCode": settings.short_code, **request.model_dump(by_alias=True)}
        return self._client.post_json(SIMULATE_PATH, body=body)
