"""Single entry point bundling auth, transport and every Daraja operation."""

from __future__ import annotations

from typing import Any

from mpesa_sdk.auth import AuthManager
from mpesa_sdk.client import MpesaClient
from mpesa_sdk.config import Config, Settings
from mpesa_sdk.models.account import AccountBalanceQueryConfig
from mpesa_sdk.models.auth import TokenResponse
from mpesa_sdk.models.b2b import B2BPaymentConfig, TaxRemittanceConfig
from mpesa_sdk.models.b2c import B2CTransactionConfig
from mpesa_sdk.models.c2b import C2BSimulateRequest, UrlRegisterConfig
from mpesa_sdk.models.qrcode import DynamicQRCodeQuery
from mpesa_sdk.models.stk import STKPushQuery
from mpesa_sdk.models.transactions import ReversalQuery, TransactionStatusQuery
from mpesa_sdk.services.account import AccountService
from mpesa_sdk.services.b2b import B2BService
from mpesa_sdk.services.b2c import B2CService
from mpesa_sdk.services.c2b import C2BService
from mpesa_sdk.services.qrcode import QRCodeService
from mpesa_sdk.services.stk import STKService
from mpesa_sdk.services.transactions import TransactionService


class Mpesa:
    """Daraja API client.

    One instance owns one token cache; share it rather than building a new
    one per request::

        with Mpesa(get_config()) as mpesa:
            mpesa.send_stk_push(STKPushQuery(...))
    """

    def __init__(self, config: Config, verbose: bool = False) -> None:
        self.config = config
        self.auth = AuthManager(config)
        self.client = MpesaClient(config, self.auth, verbose=verbose)
        self.c2b = C2BService(self.client)
        self.stk = STKService(self.client)
        self.b2c_service = B2CService(self.client)
        self.account = AccountService(self.client)
        self.qr = QRCodeService(self.client)
        self.transactions = TransactionService(self.client)
        self.b2b = B2BService(self.client)

    @classmethod
    def from_settings(cls, settings: Settings, verbose: bool = False) -> Mpesa:
        return cls(Config(settings=settings), verbose=verbose)

    def get_valid_token(self) -> str:
        return self.auth.get_valid_token()

    def get_access_token(self) -> TokenResponse:
        return self.auth.get_access_token()

    def register_urls(self, config: UrlRegisterConfig, version: str = "v2") -> dict[str, Any]:
        return self.c2b.register_urls(config, version)

    def simulate_c2b(self, request: C2BSimulateRequest) -> dict[str, Any]:
        return self.c2b.simulate(request)

    def send_stk_push(self, query: STKPushQuery) -> dict[str, Any]:
        return self.stk.send_stk_push(query)

    def query_stk_status(self, checkout_request_id: str) -> dict[str, Any]:
        return self.stk.query_status(checkout_request_id)

    def b2c(self, config: B2CTransactionConfig, version: str = "v1") -> dict[str, Any]:
        return self.b2c_service.send(config, version)

    def get_account_balance(self, query: AccountBalanceQueryConfig) -> dict[str, Any]:
        return self.account.get_balance(query)

    def generate_dynamic_qr_code(self, query: DynamicQRCodeQuery) -> dict[str, Any]:
        return self.qr.generate(query)

    def get_transaction_status(self, query: TransactionStatusQuery) -> dict[str, Any]:
        return self.transactions.get_status(query)

    def reverse_transaction(self, query: ReversalQuery) -> dict[str, Any]:
        return self.transactions.reverse(query)

    def b2b_payment(self, config: B2BPaymentConfig) -> dict[str, Any]:
        return self.b2b.pay(config)

    def remit_tax(self, config: TaxRemittanceConfig) -> dict[str, Any]:
        return self.b2b.remit_tax(config)

    def close(self) -> None:
        """Close the HTTP clients."""
        self.client.close()

    def __enter__(self) -> Mpesa:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
