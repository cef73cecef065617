"""
Daraja callback endpoints
Every callback is acknowledged with ResultCode 0, whatever it reports.
An unacknowledged callback is retried by Safaricom.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from mpesa_sdk.models.callbacks import ResultCallback, StkCallback, acknowledgement

callbacks_bp = Blueprint("callbacks", __name__)
logger = logging.getLogger(__name__)

# Result callbacks sharing the {"Result": {...}} envelope, keyed by route name
RESULT_CALLBACKS = {
    "b2c-result": "B2C",
    "balance-result": "Balance",
    "status-result": "Transaction status",
    "reversal-result": "Reversal",
    "b2b-result": "B2B",
}

TIMEOUT_CALLBACKS = {
    "b2c-timeout": "B2C",
    "balance-timeout": "Balance",
    "status-timeout": "Transaction status",
    "reversal-timeout": "Reversal",
    "b2b-timeout": "B2B",
}


def _payload() -> dict[str, Any]:
    """JSON body as a dict; anything else is treated as empty."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@callbacks_bp.route("/stk", methods=["POST"])
def stk_callback():
    """Result of an STK push"""
    payload = _payload()
    logger.info(f"STK Push callback received: {json.dumps(payload)}")

    try:
        callback = StkCallback.from_payload(payload)
    except ValidationError as e:
        logger.warning(f"Unreadable STK callback: {e}")
        return jsonify(acknowledgement()), 200

    if callback.succeeded:
        logger.info(
            f"Payment successful: receipt={callback.item('MpesaReceiptNumber')} "
            f"amount={callback.item('Amount')} phone={callback.item('PhoneNumber')} "
            f"date={callback.item('TransactionDate')} checkout={callback.checkout_request_id}"
        )
    else:
        logger.info(
            f"Payment failed: code={callback.result_code} desc={callback.result_desc} "
            f"merchant={callback.merchant_request_id} checkout={callback.checkout_request_id}"
        )

    return jsonify(acknowledgement()), 200


@callbacks_bp.route("/<name>", methods=["POST"])
def result_callback(name: str):
    """Result or queue-timeout notification for initiator-based operations"""
    payload = _payload()

    if name in TIMEOUT_CALLBACKS:
        logger.warning(f"{TIMEOUT_CALLBACKS[name]} request timed out in queue: {json.dumps(payload)}")
        return jsonify(acknowledgement("Timeout received")), 200

    if name not in RESULT_CALLBACKS:
        return jsonify({"success": False, "error": {"message": "Route not found"}}), 404

    label = RESULT_CALLBACKS[name]
    logger.info(f"{label} result callback received: {json.dumps(payload)}")

    try:
        result = ResultCallback.from_payload(payload)
    except ValidationError as e:
        logger.warning(f"Unreadable {label} result callback: {e}")
        return jsonify(acknowledgement()), 200

    if result.succeeded:
        logger.info(
            f"{label} succeeded: conversation={result.conversation_id} "
            f"originator={result.originator_conversation_id} parameters={result.parameters()}"
        )
    else:
        logger.info(
            f"{label} failed: code={result.result_code} desc={result.result_desc} "
            f"conversation={result.conversation_id}"
        )

    return jsonify(acknowledgement()), 200


@callbacks_bp.route("/c2b-validation", methods=["POST"])
def c2b_validation():
    """Accept every incoming C2B payment"""
    payload = _payload()
    logger.info(
        f"C2B validation: trans={payload.get('TransID')} amount={payload.get('TransAmount')} "
        f"account={payload.get('BillRefNumber')}"
    )
    return jsonify(acknowledgement("Accepted")), 200


@callbacks_bp.route("/c2b-confirmation", methods=["POST"])
def c2b_confirmation():
    """Completed C2B payment"""
    payload = _payload()
    logger.info(
        f"C2B confirmation: trans={payload.get('TransID')} amount={payload.get('TransAmount')} "
        f"msisdn={payload.get('MSISDN')} account={payload.get('BillRefNumber')}"
    )
    return jsonify(acknowledgement()), 200
