"""Credential encoding for Daraja requests."""

from __future__ import annotations

import base64
from datetime import datetime

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def _b64(raw: str) -> str:
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def basic_auth_header(consumer_key: str, consumer_secret: str) -> str:
    """Authorization header value for the OAuth endpoint."""
    return "Basic " + _b64(f"{consumer_key}:{consumer_secret}")


def make_timestamp(now: datetime | None = None) -> str:
    """Local time formatted as YYYYMMDDHHmmss."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def stk_password(short_code: str, pass_key: str, timestamp: str) -> str:
    """Lipa Na M-Pesa Online password: base64(short_code + pass_key + timestamp)."""
    return _b64(f"{short_code}{pass_key}{timestamp}")
