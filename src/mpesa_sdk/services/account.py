"""Account balance service."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.client import MpesaClient
from mpesa_sdk.models.account import AccountBalanceQueryConfig
from mpesa_sdk.models.common import SHORT_CODE_IDENTIFIER

BALANCE_PATH = "/mpesa/accountbalance/v1/query"


class AccountService:
    def __init__(self, client: MpesaClient) -> None:
        self._client = client

    def get_balance(self, query: AccountBalanceQueryConfig) -> dict[str, Any]:
        """Request the short code's balance. The figures arrive on ``query.result_url``.

        CommandID and IdentifierType are always AccountBalance and "4",
        whatever the query carries. The query itself is left untouched.
        """
        body = query.to_body()
        body["CommandID"] = "AccountBalance"
        body["IdentifierType"] = SHORT_CODE_IDENTIFIER
        return self._client.post_json(BALANCE_PATH, body=body)
