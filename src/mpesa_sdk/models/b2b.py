"""Business-to-business and tax remittance data models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from mpesa_sdk.models.common import InitiatorRequest


class B2BPaymentConfig(InitiatorRequest):
    command_id: Literal["BusinessPayBill", "BusinessBuyGoods"] = Field(
        default="BusinessPayBill", alias="CommandID"
    )
    amount: str = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    party_b: str = Field(alias="PartyB")
    account_reference: str = Field(alias="AccountReference")
    # Customer on whose behalf the business pays
    requester: str | None = Field(default=None, alias="Requester")


class TaxRemittanceConfig(InitiatorRequest):
    """KRA tax payment. ``account_reference`` is the payment registration number."""
    amount: str = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    account_reference: str = Field(alias="AccountReference")
