"""Error types and structured error output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class MpesaError(RuntimeError):
    """Base error for everything the SDK raises."""

    status_code: int | None = 500
    code = "MPESA_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(MpesaError):
    """Token fetch failed. The cached token has already been discarded."""

    code = "AUTH_ERROR"


class ApiError(MpesaError):
    """An operation call failed in transport, returned a non-2xx status or a non-JSON body.

    ``status_code`` is the vendor's HTTP status, or None when no response
    was received.
    """

    code = "API_ERROR"

    def __init__(self, message: str, status_code: int | None = None, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class RequestValidationError(MpesaError):
    """Caller input rejected before any network call."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = errors


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("access token", "Check MPESA_CONSUMER_KEY / MPESA_CONSUMER_SECRET and run `mpesa auth login`"),
    ("401", "Token rejected — run `mpesa auth login` to fetch a new one"),
    ("unauthorized", "Token rejected — run `mpesa auth login` to fetch a new one"),
    ("missing required environment", "Set the missing variables in your environment or .env file"),
    ("429", "Rate limited — wait a moment and retry"),
    ("spike arrest", "Rate limited — wait a moment and retry"),
    ("timeout", "Request timed out — try again or raise MPESA_TIMEOUT"),
    ("connection", "Connection error — check network connectivity"),
    ("security credential", "SecurityCredential must be encrypted with the environment's M-Pesa certificate"),
    ("invalid phone", "Phone numbers use the 2547XXXXXXXX format"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _error_code(error: Exception) -> str:
    if isinstance(error, MpesaError):
        if isinstance(error, ApiError) and error.status_code == 429:
            return "RATE_LIMITED"
        return error.code

    message = str(error).lower()
    if "timeout" in message:
        return "TIMEOUT"
    if "connection" in message:
        return "CONNECTION_ERROR"
    if "missing required environment" in message:
        return "CONFIG_ERROR"
    if isinstance(error, OSError):
        return "IO_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for scripted consumers:
    {"error": true, "code": "API_ERROR", "message": "...", "status": 500, "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _error_code(error),
        "message": message,
    }
    if isinstance(error, ApiError) and error.status_code is not None:
        error_obj["status"] = error.status_code
    if isinstance(error, RequestValidationError):
        error_obj["details"] = error.errors
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    # Human-readable to stderr
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
