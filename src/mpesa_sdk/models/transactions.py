"""Transaction status and reversal data models."""

from __future__ import annotations

from pydantic import Field

from mpesa_sdk.models.common import SHORT_CODE_IDENTIFIER, InitiatorRequest


class TransactionStatusQuery(InitiatorRequest):
    transaction_id: str = Field(alias="TransactionID")
    original_conversation_id: str | None = Field(default=None, alias="OriginalConversationID")
    party_a: str = Field(alias="PartyA")
    identifier_type: str = Field(default=SHORT_CODE_IDENTIFIER, alias="IdentifierType")
    occasion: str = Field(default="", alias="Occasion")


class ReversalQuery(InitiatorRequest):
    transaction_id: str = Field(alias="TransactionID")
    amount: str = Field(alias="Amount")
    receiver_party: str = Field(alias="ReceiverParty")
    occasion: str = Field(default="", alias="Occasion")
