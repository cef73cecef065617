"""Business-to-customer data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class B2CTransactionConfig(BaseModel):
    # Required by the v3 endpoint only
    originator_conversation_id: str | None = Field(default=None, alias="OriginatorConversationID")
    initiator_name: str = Field(alias="InitiatorName")
    security_credential: str = Field(alias="SecurityCredential")
    command_id: str = Field(default="BusinessPayment", alias="CommandID")  # SalaryPayment, BusinessPayment, PromotionPayment
    amount: str = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    party_b: str = Field(alias="PartyB")
    remarks: str = Field(alias="Remarks")
    queue_timeout_url: str = Field(alias="QueueTimeOutURL")
    result_url: str = Field(alias="ResultURL")
    # Vendor spelling
    occasion: str = Field(default="", alias="Occassion")

    model_config = {"populate_by_name": True, "frozen": True}
