"""Request bodies accepted by the example server's routes.

Each model checks field presence and format so bad input is rejected
before any call to Daraja.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from mpesa_sdk.utils.errors import RequestValidationError

PHONE_PATTERN = re.compile(r"^254\d{9}$")

T = TypeVar("T", bound=BaseModel)


def _normalize_phone(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Phone number must be in format 254XXXXXXXXX (e.g., 254712345678)")
    value = re.sub(r"\s+", "", value)
    if not PHONE_PATTERN.match(value):
        raise ValueError("Phone number must be in format 254XXXXXXXXX (e.g., 254712345678)")
    return value


def _positive_amount_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Amount must be a positive number string")
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError("Amount must be a positive number string") from None
    if parsed <= 0:
        raise ValueError("Amount must be a positive number string")
    return value


PhoneNumber = Annotated[str, BeforeValidator(_normalize_phone)]
AmountString = Annotated[str, BeforeValidator(_positive_amount_string)]


class _Body(BaseModel):
    model_config = {"populate_by_name": True, "frozen": True, "str_strip_whitespace": True}


class STKPushBody(_Body):
    amount: int = Field(gt=0, strict=True)
    phone_number: PhoneNumber = Field(alias="phoneNumber")
    reference: str = Field(min_length=1)
    description: str = Field(min_length=1)


class B2CBody(_Body):
    amount: AmountString
    phone_number: PhoneNumber = Field(alias="phoneNumber")
    remarks: str = Field(min_length=1)
    occasion: str = ""
    initiator_name: str = Field(alias="initiatorName", min_length=1)
    security_credential: str = Field(alias="securityCredential", min_length=1)
    command_id: Literal["SalaryPayment", "BusinessPayment", "PromotionPayment"] = Field(
        default="SalaryPayment", alias="commandId"
    )


class BalanceBody(_Body):
    party_a: int = Field(alias="partyA")
    remarks: str = Field(min_length=1)
    initiator: str = Field(min_length=1)
    security_credential: str = Field(alias="securityCredential", min_length=1)


class RegisterUrlsBody(_Body):
    short_code: str = Field(alias="shortCode", min_length=1)
    confirmation_url: str = Field(alias="confirmationUrl", min_length=1)
    validation_url: str = Field(alias="validationUrl", min_length=1)
    response_type: Literal["Completed", "Cancelled"] = Field(default="Completed", alias="responseType")


class QRCodeBody(_Body):
    merchant_name: str = Field(alias="merchantName", min_length=1)
    ref_no: str = Field(alias="refNo", min_length=1)
    amount: int = Field(gt=0)
    trx_code: Literal["BG", "WA", "PB", "SM", "SB"] = Field(alias="trxCode")
    cpi: str = Field(min_length=1)
    size: str = "300"


class TransactionStatusBody(_Body):
    transaction_id: str = Field(alias="transactionId", min_length=1)
    initiator: str = Field(min_length=1)
    security_credential: str = Field(alias="securityCredential", min_length=1)
    party_a: str | None = Field(default=None, alias="partyA")
    identifier_type: Literal["1", "2", "4"] = Field(default="4", alias="identifierType")
    remarks: str = "Status check"


class ReversalBody(_Body):
    transaction_id: str = Field(alias="transactionId", min_length=1)
    amount: AmountString
    initiator: str = Field(min_length=1)
    security_credential: str = Field(alias="securityCredential", min_length=1)
    receiver_party: str | None = Field(default=None, alias="receiverParty")
    remarks: str = "Reversal"


def _describe(error: dict[str, Any]) -> str:
    field = ".".join(str(part) for part in error["loc"]) or "body"
    message = error["msg"].removeprefix("Value error, ")
    return f"{field}: {message}"


def validate(model: type[T], payload: Any) -> T:
    """Parse a JSON payload into ``model``.

    Raises:
        RequestValidationError: With one entry per violated field.
    """
    if not isinstance(payload, dict):
        raise RequestValidationError(["body: Request body must be a JSON object"])
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError([_describe(err) for err in e.errors()]) from e
