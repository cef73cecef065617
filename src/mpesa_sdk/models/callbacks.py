"""Vendor callback payloads.

Parsing is lenient: missing sections default to empty so a malformed
callback can still be logged and acknowledged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CallbackItem(BaseModel):
    name: str = Field(alias="Name")
    value: Any = Field(default=None, alias="Value")

    model_config = {"populate_by_name": True}


class CallbackMetadata(BaseModel):
    items: list[CallbackItem] = Field(default_factory=list, alias="Item")

    model_config = {"populate_by_name": True}


class StkCallback(BaseModel):
    merchant_request_id: str | None = Field(default=None, alias="MerchantRequestID")
    checkout_request_id: str | None = Field(default=None, alias="CheckoutRequestID")
    result_code: int | None = Field(default=None, alias="ResultCode")
    result_desc: str | None = Field(default=None, alias="ResultDesc")
    metadata: CallbackMetadata = Field(default_factory=CallbackMetadata, alias="CallbackMetadata")

    model_config = {"populate_by_name": True}

    @property
    def succeeded(self) -> bool:
        return self.result_code == 0

    def item(self, name: str) -> Any:
        """Value of a CallbackMetadata item, or None."""
        for entry in self.metadata.items:
            if entry.name == name:
                return entry.value
        return None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> StkCallback:
        """Extract Body.stkCallback from a raw callback payload."""
        body = payload.get("Body")
        if not isinstance(body, dict):
            body = {}
        return cls.model_validate(body.get("stkCallback") or {})


class ResultParameters(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list, alias="ResultParameter")

    model_config = {"populate_by_name": True}

    @field_validator("items", mode="before")
    @classmethod
    def _wrap_single(cls, value: Any) -> Any:
        # A single parameter arrives as a bare object
        if isinstance(value, dict):
            return [value]
        return value


class ResultCallback(BaseModel):
    """Result body shared by B2C, balance, status, reversal and B2B callbacks."""
    result_type: int | None = Field(default=None, alias="ResultType")
    result_code: int | None = Field(default=None, alias="ResultCode")
    result_desc: str | None = Field(default=None, alias="ResultDesc")
    originator_conversation_id: str | None = Field(default=None, alias="OriginatorConversationID")
    conversation_id: str | None = Field(default=None, alias="ConversationID")
    transaction_id: str | None = Field(default=None, alias="TransactionID")
    result_parameters: ResultParameters = Field(default_factory=ResultParameters, alias="ResultParameters")

    model_config = {"populate_by_name": True}

    @property
    def succeeded(self) -> bool:
        return self.result_code == 0

    def parameters(self) -> dict[str, Any]:
        """ResultParameter entries flattened to {Key: Value}."""
        return {
            p["Key"]: p.get("Value")
            for p in self.result_parameters.items
            if isinstance(p, dict) and isinstance(p.get("Key"), str)
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ResultCallback:
        """Extract Result from a raw callback payload."""
        return cls.model_validate(payload.get("Result") or {})


def acknowledgement(description: str = "Callback processed successfully") -> dict[str, Any]:
    """Body every callback must be answered with, whatever it reported."""
    return {"ResultCode": 0, "ResultDesc": description}
