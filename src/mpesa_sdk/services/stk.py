"""Lipa Na M-Pesa Online (STK push) service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.config import Settings
from mpesa_sdk.models.stk import STKPushQuery, STKPushRequest, STKStatusRequest
from mpesa_sdk.utils.credentials import make_timestamp, stk_password

STK_PUSH_PATH = "/mpesa/stkpush/v1/processrequest"
STK_QUERY_PATH = "/mpesa/stkpushquery/v1/query"


def _credentials(settings: Settings) -> tuple[str, str, str]:
    timestamp = make_timestamp()
    return settings.short_code, stk_password(settings.short_code, settings.pass_key, timestamp), timestamp


def build_push_request(settings: Settings, query: STKPushQuery) -> STKPushRequest:
    """Outbound STK push body for ``query``, paid to the configured short code."""
    short_code, password, timestamp = _credentials(settings)
    return STKPushRequest(
        business_short_code=short_code,
        password=password,
        timestamp=timestamp,
        transaction_type=query.transaction_type,
        amount=query.amount,
        party_a=query.sender,
        party_b=short_code,
        phone_number=query.sender,
        callback_url=query.callback_url,
        account_reference=query.reference,
        transaction_desc=query.description,
    )


class STKService:
    """Prompts a customer's phone to authorise a payment to the configured short code."""

    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def send_stk_push(self, query: STKPushQuery) -> dict[str, Any]:
        """Send an STK push and return the vendor's acknowledgement.

        The outcome arrives later on ``query.callback_url``.
        """
        request = build_push_request(self._client.config.settings, query)
        return self._client.post_json(STK_PUSH_PATH, body=request.model_dump(by_alias=True))

    def query_status(self, checkout_request_id: str) -> dict[str, Any]:
        """Ask for the result of an earlier push by its CheckoutRequestID."""
        short_code, password, timestamp = _credentials(self._client.config.settings)
        request = STKStatusRequest(
            business_short_code=short_code,
            password=password,
            timestamp=timestamp,
            checkout_request_id=checkout_request_id,
        )
        return self._client.post_json(STK_QUERY_PATH, body=request.model_dump(by_alias=True))
