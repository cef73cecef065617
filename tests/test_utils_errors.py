"""Tests for utils/errors.py — error code classification and hint matching."""
import json

from mpesa_sdk.utils.errors import (
    ApiError,
    AuthenticationError,
    MpesaError,
    RequestValidationError,
    _get_hint,
    handle_error,
)


# ── _get_hint tests ───────────────────────────────────────────────────

def test_hint_access_token():
    assert "MPESA_CONSUMER_KEY" in _get_hint("Failed to get access token: HTTP 400")


def test_hint_401():
    assert "auth login" in _get_hint("API error (HTTP 401): Invalid Access Token")


def test_hint_429():
    assert "rate" in _get_hint("API error (HTTP 429): Too many requests").lower()


def test_hint_spike_arrest():
    assert "rate" in _get_hint("Spike arrest violation").lower()


def test_hint_missing_env():
    assert ".env" in _get_hint("Missing required environment variables: MPESA_PASSKEY")


def test_hint_timeout():
    assert "timed out" in _get_hint("Connection timeout occurred").lower()


def test_hint_connection():
    assert "network" in _get_hint("Connection refused").lower()


def test_hint_security_credential():
    assert "certificate" in _get_hint("The initiator information is invalid: security credential").lower()


def test_hint_no_match():
    assert _get_hint("some random error") is None


# ── Error types ──────────────────────────────────────────────────────

def test_api_error_keeps_vendor_status():
    err = ApiError("API error (HTTP 404): not found", status_code=404, detail="not found")
    assert err.status_code == 404
    assert err.detail == "not found"
    assert isinstance(err, MpesaError)


def test_api_error_without_response():
    assert ApiError("Request to /x failed").status_code is None


def test_validation_error_joins_messages():
    err = RequestValidationError(["amount: must be positive", "phoneNumber: invalid phone number"])
    assert str(err) == "amount: must be positive, phoneNumber: invalid phone number"
    assert err.status_code == 400
    assert err.errors == ["amount: must be positive", "phoneNumber: invalid phone number"]


def test_errors_are_runtime_errors():
    assert issubclass(AuthenticationError, RuntimeError)


# ── handle_error tests ───────────────────────────────────────────────

def test_handle_error_json_output(capsys):
    handle_error(RuntimeError("something went wrong"))
    out = capsys.readouterr().out
    data = json.loads(out.strip())
    assert data["error"] is True
    assert data["code"] == "RUNTIME_ERROR"
    assert data["message"] == "something went wrong"


def test_handle_error_auth(capsys):
    handle_error(AuthenticationError("Failed to get access token: HTTP 400", status_code=400))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "AUTH_ERROR"
    assert "hint" in data


def test_handle_error_api_status(capsys):
    handle_error(ApiError("API error (HTTP 500): boom", status_code=500))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "API_ERROR"
    assert data["status"] == 500


def test_handle_error_rate_limited(capsys):
    handle_error(ApiError("API error (HTTP 429): slow down", status_code=429))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "RATE_LIMITED"


def test_handle_error_validation_details(capsys):
    handle_error(RequestValidationError(["amount: must be positive"]))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "VALIDATION_ERROR"
    assert data["details"] == ["amount: must be positive"]


def test_handle_error_timeout_code(capsys):
    handle_error(RuntimeError("Request timeout after 30s"))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "TIMEOUT"


def test_handle_error_config_code(capsys):
    handle_error(ValueError("Missing required environment variables: MPESA_CONSUMER_KEY"))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "CONFIG_ERROR"


def test_handle_error_io_code(capsys):
    handle_error(PermissionError(13, "Permission denied", "/root/qr.png"))
    data = json.loads(capsys.readouterr().out.strip())
    assert data["code"] == "IO_ERROR"
