"""Fields shared by initiator-authorised requests."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Identifier types: 1 = MSISDN, 2 = till number, 4 = organisation short code, 11 = reversal receiver
SHORT_CODE_IDENTIFIER = "4"


class InitiatorRequest(BaseModel):
    """Base for requests signed by an API initiator.

    ``security_credential`` is the initiator password already encrypted with
    the M-Pesa public certificate for the target environment.
    """
    initiator: str = Field(alias="Initiator")
    security_credential: str = Field(alias="SecurityCredential")
    remarks: str = Field(alias="Remarks")
    queue_timeout_url: str = Field(alias="QueueTimeOutURL")
    result_url: str = Field(alias="ResultURL")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_body(self) -> dict:
        """Vendor JSON body for this request."""
        return self.model_dump(by_alias=True, exclude_none=True)
