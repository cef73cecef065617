"""Business-to-customer payout service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.models.b2c import B2CTransactionConfig

B2C_VERSIONS = ("v1", "v3")


class B2CService:
    """Sends money from the business short code to a customer's M-Pesa wallet."""

    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def send(self, config: B2CTransactionConfig, version: str = "v1") -> dict[str, Any]:
        """Submit a B2C payment request.

        v3 additionally requires ``originator_conversation_id``.
        """
        if version not in B2C_VERSIONS:
            raise ValueError(f"Unknown B2C version '{version}'. Available: {', '.join(B2C_VERSIONS)}")
        if version == "v3" and not config.originator_conversation_id:
            raise ValueError("B2C v3 requires an OriginatorConversationID")

        return self._client.post_json(
            f"/mpesa/b2c/{version}/paymentrequest",
            body=config.model_dump(by_alias=True, exclude_none=True),
        )
