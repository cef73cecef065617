"""Customer-to-business data models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class UrlRegisterConfig(BaseModel):
    short_code: str = Field(alias="ShortCode")
    # What M-Pesa does when the validation URL is unreachable
    response_type: Literal["Completed", "Cancelled"] = Field(default="Completed", alias="ResponseType")
    confirmation_url: str = Field(alias="ConfirmationURL")
    validation_url: str = Field(alias="ValidationURL")

    model_config = {"populate_by_name": True, "frozen": True}


class C2BSimulateRequest(BaseModel):
    """Sandbox-only simulated customer payment. ShortCode comes from settings."""
    command_id: Literal["CustomerPayBillOnline", "CustomerBuyGoodsOnline"] = Field(
        default="CustomerPayBillOnline", alias="CommandID"
    )
    amount: int = Field(alias="Amount", gt=0)
    msisdn: str = Field(alias="Msisdn")
    bill_ref_number: str = Field(default="", alias="BillRefNumber")

    model_config = {"populate_by_name": True, "frozen": True}
