"""Lipa Na M-Pesa Online (STK push) data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class STKPushQuery(BaseModel):
    """Caller input for an STK push.

    ``sender`` is the paying MSISDN (2547XXXXXXXX); it becomes both
    ``PartyA`` and ``PhoneNumber`` in the vendor body.
    """
    amount: int = Field(gt=0)
    sender: str
    reference: str
    callback_url: str = Field(alias="callbackUrl")
    description: str
    transaction_type: str = Field(default="CustomerPayBillOnline", alias="transactionType")

    model_config = {"populate_by_name": True, "frozen": True}


class STKPushRequest(BaseModel):
    """Outbound body for /mpesa/stkpush/v1/processrequest."""
    business_short_code: str = Field(alias="BusinessShortCode")
    password: str = Field(alias="Password")
    timestamp: str = Field(alias="Timestamp")
    transaction_type: str = Field(alias="TransactionType")
    amount: int = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    party_b: str = Field(alias="PartyB")
    phone_number: str = Field(alias="PhoneNumber")
    callback_url: str = Field(alias="CallBackURL")
    account_reference: str = Field(alias="AccountReference")
    transaction_desc: str = Field(alias="TransactionDesc")

    model_config = {"populate_by_name": True}


class STKStatusRequest(BaseModel):
    """Outbound body for /mpesa/stkpushquery/v1/query."""
    business_short_code: str = Field(alias="BusinessShortCode")
    password: str = Field(alias="Password")
    timestamp: str = Field(alias="Timestamp")
    checkout_request_id: str = Field(alias="CheckoutRequestID")

    model_config = {"populate_by_name": True}
