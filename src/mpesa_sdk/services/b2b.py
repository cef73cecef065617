"""Business-to-business payment and tax remittance service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.models.b2b import B2BPaymentConfig, TaxRemittanceConfig
from mpesa_sdk.models.common import SHORT_CODE_IDENTIFIER

B2B_PATH = "/mpesa/b2b/v1/paymentrequest"
REMIT_TAX_PATH = "/mpesa/b2b/v1/remittax"

# KRA collection short code
KRA_SHORT_CODE = "572572"


def _with_identifiers(body: dict[str, Any]) -> dict[str, Any]:
    body["SenderIdentifierType"] = SHORT_CODE_IDENTIFIER
    # Vendor spelling
    body["RecieverIdentifierType"] = SHORT_CODE_IDENTIFIER
    return body


class B2BService:
    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def pay(self, config: B2BPaymentConfig) -> dict[str, Any]:
        """Pay another business's paybill or till from the configured short code."""
        body = _with_identifiers(config.to_body())
        return self._client.post_json(B2B_PATH, body=body)

    def remit_tax(self, config: TaxRemittanceConfig) -> dict[str, Any]:
        """Remit tax to KRA. CommandID and PartyB are fixed by the vendor."""
        body = _with_identifiers(config.to_body())
        body["CommandID"] = "PayTaxToKRA"
        body["PartyB"] = KRA_SHORT_CODE
        return self._client.post_json(REMIT_TAX_PATH, body=body)
