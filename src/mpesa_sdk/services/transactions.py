"""Transaction status and reversal service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.models.transactions import ReversalQuery, TransactionStatusQuery

STATUS_PATH = "/mpesa/transactionstatus/v1/query"
REVERSAL_PATH = "/mpesa/reversal/v1/request"

# Receiver identifier type the reversal API expects
REVERSAL_RECEIVER_IDENTIFIER = "11"


class TransactionService:
    """Looks up and reverses completed M-Pesa transactions."""

    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def get_status(self, query: TransactionStatusQuery) -> dict[str, Any]:
        """Query a transaction's status. The result arrives on ``query.result_url``."""
        body = query.to_body()
        body["CommandID"] = "TransactionStatusQuery"
        return self._client.post_json(STATUS_PATH, body=body)

    def reverse(self, query: ReversalQuery) -> dict[str, Any]:
        """Request reversal of a C2B transaction."""
        body = query.to_body()
        body["CommandID"] = "TransactionReversal"
        body["RecieverIdentifierType"] = REVERSAL_RECEIVER_IDENTIFIER
        return self._client.post_json(REVERSAL_PATH, body=body)
