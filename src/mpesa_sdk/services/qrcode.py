"""Dynamic QR code service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.models.qrcode import DynamicQRCodeQuery

QR_PATH = "/mpesa/qrcode/v1/generate"


class QRCodeService:
    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def generate(self, query: DynamicQRCodeQuery) -> dict[str, Any]:
        """Generate a QR code customers can scan to pay."""
        return self._client.post_json(QR_PATH, body=query.model_dump(by_alias=True))
