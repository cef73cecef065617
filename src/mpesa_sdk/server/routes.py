"""
M-Pesa API routes
Adapt inbound HTTP requests to SDK calls
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from mpesa_sdk.models.account import AccountBalanceQueryConfig
from mpesa_sdk.models.b2c import B2CTransactionConfig
from mpesa_sdk.models.c2b import UrlRegisterConfig
from mpesa_sdk.models.qrcode import DynamicQRCodeQuery
from mpesa_sdk.models.stk import STKPushQuery
from mpesa_sdk.models.transactions import ReversalQuery, TransactionStatusQuery
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.server.validation import (
    B2CBody,
    BalanceBody,
    QRCodeBody,
    RegisterUrlsBody,
    ReversalBody,
    STKPushBody,
    TransactionStatusBody,
    validate,
)

mpesa_bp = Blueprint("mpesa", __name__)
logger = logging.getLogger(__name__)

CALLBACK_PREFIX = "/api/mpesa/callbacks"


def _mpesa() -> Mpesa:
    return current_app.extensions["mpesa"]


def _callback(name: str) -> str:
    return _mpesa().config.callback_url(f"{CALLBACK_PREFIX}/{name}")


def _ok(data, message: str):
    return jsonify({"success": True, "data": data, "message": message}), 200


@mpesa_bp.route("/stk-push", methods=["POST"])
def stk_push():
    """
    Initiate an STK push payment request

    Body:
        amount, phoneNumber, reference, description
    """
    body = validate(STKPushBody, request.get_json(silent=True))

    result = _mpesa().send_stk_push(STKPushQuery(
        amount=body.amount,
        sender=body.phone_number,
        callback_url=_callback("stk"),
        reference=body.reference,
        description=body.description,
    ))
    return _ok(result, "STK Push request sent successfully")


@mpesa_bp.route("/stk-push/<checkout_request_id>", methods=["GET"])
def stk_push_status(checkout_request_id: str):
    """Query the result of an earlier STK push"""
    result = _mpesa().query_stk_status(checkout_request_id)
    return _ok(result, "STK Push status retrieved")


@mpesa_bp.route("/b2c", methods=["POST"])
def b2c():
    """
    Send money to a customer

    Body:
        amount, phoneNumber, remarks, initiatorName, securityCredential,
        occasion (optional), commandId (optional)
    """
    body = validate(B2CBody, request.get_json(silent=True))
    mpesa = _mpesa()

    result = mpesa.b2c(B2CTransactionConfig(
        initiator_name=body.initiator_name,
        security_credential=body.security_credential,
        command_id=body.command_id,
        amount=body.amount,
        party_a=mpesa.config.settings.short_code,
        party_b=body.phone_number,
        remarks=body.remarks,
        queue_timeout_url=_callback("b2c-timeout"),
        result_url=_callback("b2c-result"),
        occasion=body.occasion,
    ))
    return _ok(result, "B2C transaction initiated successfully")


@mpesa_bp.route("/balance", methods=["POST"])
def balance():
    """
    Account balance query

    Body:
        partyA, remarks, initiator, securityCredential
    """
    body = validate(BalanceBody, request.get_json(silent=True))

    result = _mpesa().get_account_balance(AccountBalanceQueryConfig(
        party_a=body.party_a,
        remarks=body.remarks,
        initiator=body.initiator,
        security_credential=body.security_credential,
        queue_timeout_url=_callback("balance-timeout"),
        result_url=_callback("balance-result"),
    ))
    return _ok(result, "Balance query initiated successfully")


@mpesa_bp.route("/register-urls", methods=["POST"])
def register_urls():
    """
    Register C2B confirmation and validation URLs

    Body:
        shortCode, confirmationUrl, validationUrl (absolute or relative to the callback base)
    """
    body = validate(RegisterUrlsBody, request.get_json(silent=True))
    config = _mpesa().config

    result = _mpesa().register_urls(UrlRegisterConfig(
        short_code=body.short_code,
        response_type=body.response_type,
        confirmation_url=config.callback_url(body.confirmation_url),
        validation_url=config.callback_url(body.validation_url),
    ))
    return _ok(result, "URLs registered successfully")


@mpesa_bp.route("/qr-code", methods=["POST"])
def qr_code():
    """
    Generate a dynamic QR code

    Body:
        merchantName, refNo, amount, trxCode, cpi, size (optional)
    """
    body = validate(QRCodeBody, request.get_json(silent=True))

    result = _mpesa().generate_dynamic_qr_code(DynamicQRCodeQuery(
        merchant_name=body.merchant_name,
        ref_no=body.ref_no,
        amount=body.amount,
        trx_code=body.trx_code,
        cpi=body.cpi,
        size=body.size,
    ))
    return _ok(result, "QR code generated successfully")


@mpesa_bp.route("/transaction-status", methods=["POST"])
def transaction_status():
    """
    Query the status of a transaction

    Body:
        transactionId, initiator, securityCredential, partyA (optional), identifierType (optional)
    """
    body = validate(TransactionStatusBody, request.get_json(silent=True))
    mpesa = _mpesa()

    result = mpesa.get_transaction_status(TransactionStatusQuery(
        initiator=body.initiator,
        security_credential=body.security_credential,
        transaction_id=body.transaction_id,
        party_a=body.party_a or mpesa.config.settings.short_code,
        identifier_type=body.identifier_type,
        remarks=body.remarks,
        queue_timeout_url=_callback("status-timeout"),
        result_url=_callback("status-result"),
    ))
    return _ok(result, "Transaction status query initiated successfully")


@mpesa_bp.route("/reversal", methods=["POST"])
def reversal():
    """
    Reverse a transaction

    Body:
        transactionId, amount, initiator, securityCredential, receiverParty (optional)
    """
    body = validate(ReversalBody, request.get_json(silent=True))
    mpesa = _mpesa()

    result = mpesa.reverse_transaction(ReversalQuery(
        initiator=body.initiator,
        security_credential=body.security_credential,
        transaction_id=body.transaction_id,
        amount=body.amount,
        receiver_party=body.receiver_party or mpesa.config.settings.short_code,
        remarks=body.remarks,
        queue_timeout_url=_callback("reversal-timeout"),
        result_url=_callback("reversal-result"),
    ))
    return _ok(result, "Reversal initiated successfully")
