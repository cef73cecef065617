"""Dynamic QR code data models."""

from __future__ import annotations

import base64
from typing import Literal

from pydantic import BaseModel, Field


class DynamicQRCodeQuery(BaseModel):
    merchant_name: str = Field(alias="MerchantName")
    ref_no: str = Field(alias="RefNo")
    amount: int = Field(alias="Amount", gt=0)
    # BG buy goods, WA withdraw at agent, PB paybill, SM send money, SB send to business
    trx_code: Literal["BG", "WA", "PB", "SM", "SB"] = Field(alias="TrxCode")
    cpi: str = Field(alias="CPI")
    size: str = Field(default="300", alias="Size")

    model_config = {"populate_by_name": True, "frozen": True}


class DynamicQRCodeResponse(BaseModel):
    response_code: str = Field(alias="ResponseCode")
    request_id: str | None = Field(default=None, alias="RequestID")
    response_description: str = Field(alias="ResponseDescription")
    qr_code: str = Field(alias="QRCode")

    model_config = {"populate_by_name": True}

    def image_bytes(self) -> bytes:
        """Decode the base64 PNG returned by the vendor."""
        return base64.b64decode(self.qr_code)
