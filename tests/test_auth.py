"""Tests for auth.py — token fetch, caching, expiry buffer, invalidation, status."""
import base64
import threading
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import httpx
import pytest

from mpesa_sdk.auth import EXPIRY_BUFFER, AuthManager
from mpesa_sdk.config import Config, Environment
from mpesa_sdk.models.auth import CachedToken
from mpesa_sdk.utils.errors import AuthenticationError


def _make_token_response(access_token="tok-abc", expires_in="3599"):
    """Build a fake httpx.Response for the OAuth endpoint."""
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = {
        "access_token": access_token,
        "expires_in": expires_in,
    }
    return resp


def _error_response(status_code=400, text="Bad Request"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = {"errorMessage": "Invalid Authentication passed"}
    return resp


@pytest.fixture
def auth(fake_config):
    a = AuthManager(fake_config)
    a._http = MagicMock()
    return a


# ── Token fetch ──────────────────────────────────────────────────────

def test_fetch_sets_token(auth):
    auth._http.get.return_value = _make_token_response("my-token")

    token = auth.get_valid_token()
    assert token == "my-token"
    auth._http.get.assert_called_once()


def test_fetch_hits_oauth_endpoint(auth):
    auth._http.get.return_value = _make_token_response()

    auth.get_valid_token()
    call = auth._http.get.call_args
    assert call[0][0] == "https://sandbox.safaricom.co.ke/oauth/v1/generate"
    assert call[1]["params"] == {"grant_type": "client_credentials"}


def test_fetch_uses_basic_auth(auth):
    auth._http.get.return_value = _make_token_response()

    auth.get_valid_token()
    header = auth._http.get.call_args[1]["headers"]["Authorization"]
    expected = base64.b64encode(b"test-consumer-key:test-consumer-secret").decode()
    assert header == f"Basic {expected}"


def test_production_uses_api_host(fake_settings):
    settings = fake_settings.model_copy(update={"environment": Environment.PRODUCTION})
    auth = AuthManager(Config(settings=settings))
    auth._http = MagicMock()
    auth._http.get.return_value = _make_token_response()

    auth.get_valid_token()
    assert auth._http.get.call_args[0][0].startswith("https://api.safaricom.co.ke/")


def test_expiry_computed_from_string_seconds(auth):
    auth._http.get.return_value = _make_token_response(expires_in="3599")

    before = datetime.now()
    auth.get_valid_token()
    after = datetime.now()

    expires_at = auth._cached.expires_at
    assert before + timedelta(seconds=3599) <= expires_at <= after + timedelta(seconds=3599)


# ── Caching ──────────────────────────────────────────────────────────

def test_caches_token(auth):
    auth._http.get.return_value = _make_token_response("cached-tok")

    auth.get_valid_token()
    assert auth._http.get.call_count == 1

    token = auth.get_valid_token()
    assert auth._http.get.call_count == 1
    assert token == "cached-tok"


def test_fresh_cached_token_needs_no_network(auth):
    auth._cached = CachedToken(token="still-good", expires_at=datetime.now() + timedelta(minutes=30))

    assert auth.get_valid_token() == "still-good"
    auth._http.get.assert_not_called()


def test_force_refresh_bypasses_cache(auth):
    auth._http.get.return_value = _make_token_response("fresh-tok")

    auth.get_valid_token()
    auth.get_valid_token(force_refresh=True)
    assert auth._http.get.call_count == 2


def test_get_access_token_always_fetches(auth):
    auth._http.get.return_value = _make_token_response("raw", expires_in="3599")
    auth._cached = CachedToken(token="old", expires_at=datetime.now() + timedelta(hours=1))

    response = auth.get_access_token()
    assert response.access_token == "raw"
    assert response.expires_in == 3599
    assert auth._cached.token == "raw"


# ── Expiry buffer ────────────────────────────────────────────────────

def test_buffer_is_sixty_seconds():
    assert EXPIRY_BUFFER == timedelta(seconds=60)


def test_expired_token_triggers_refresh(auth):
    auth._http.get.return_value = _make_token_response("new-tok")
    auth._cached = CachedToken(token="old-tok", expires_at=datetime.now() - timedelta(minutes=1))

    token = auth.get_valid_token()
    assert token == "new-tok"
    auth._http.get.assert_called_once()


def test_token_within_buffer_triggers_refresh(auth):
    auth._http.get.return_value = _make_token_response("refreshed")
    # Expires in 30 seconds, inside the 60-second buffer
    auth._cached = CachedToken(token="about-to-expire", expires_at=datetime.now() + timedelta(seconds=30))

    token = auth.get_valid_token()
    assert token == "refreshed"
    assert auth._cached.token == "refreshed"


def test_token_just_outside_buffer_is_reused(auth):
    auth._cached = CachedToken(token="ok", expires_at=datetime.now() + timedelta(seconds=90))

    assert auth.get_valid_token() == "ok"
    auth._http.get.assert_not_called()


# ── Failure handling ─────────────────────────────────────────────────

def test_non_2xx_raises_auth_error(auth):
    auth._http.get.return_value = _error_response(400)

    with pytest.raises(AuthenticationError, match="Failed to get access token") as exc_info:
        auth.get_valid_token()
    assert exc_info.value.status_code == 400


def test_failure_clears_cache(auth):
    auth._cached = CachedToken(token="stale", expires_at=datetime.now() + timedelta(seconds=10))
    auth._http.get.return_value = _error_response(500, "Internal Server Error")

    with pytest.raises(AuthenticationError):
        auth.get_valid_token()
    assert auth._cached is None


def test_after_failure_next_call_fetches_again(auth):
    auth._cached = CachedToken(token="stale", expires_at=datetime.now() + timedelta(seconds=10))
    auth._http.get.side_effect = [_error_response(503), _make_token_response("recovered")]

    with pytest.raises(AuthenticationError):
        auth.get_valid_token()

    token = auth.get_valid_token()
    assert token == "recovered"
    assert token != "stale"
    assert auth._http.get.call_count == 2


def test_transport_error_wrapped(auth):
    cause = httpx.ConnectError("connection refused")
    auth._http.get.side_effect = cause

    with pytest.raises(AuthenticationError, match="connection refused") as exc_info:
        auth.get_valid_token()
    assert exc_info.value.__cause__ is cause
    assert auth._cached is None


def test_unreadable_body_raises_auth_error(auth):
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = {"unexpected": True}
    auth._http.get.return_value = resp

    with pytest.raises(AuthenticationError):
        auth.get_valid_token()
    assert auth._cached is None


def test_no_automatic_retry(auth):
    auth._http.get.return_value = _error_response(500)

    with pytest.raises(AuthenticationError):
        auth.get_valid_token()
    assert auth._http.get.call_count == 1


# ── Concurrency ──────────────────────────────────────────────────────

def test_concurrent_stale_callers_share_one_fetch(auth):
    started = threading.Event()
    release = threading.Event()

    def slow_get(*args, **kwargs):
        started.set()
        release.wait(timeout=5)
        return _make_token_response("shared")

    auth._http.get.side_effect = slow_get
    results = []

    def worker():
        results.append(auth.get_valid_token())

    threads = [threading.Thread(target=worker) for _ in range(5)]
    threads[0].start()
    started.wait(timeout=5)
    for t in threads[1:]:
        t.start()
    release.set()
    for t in threads:
        t.join(timeout=5)

    assert results == ["shared"] * 5
    assert auth._http.get.call_count == 1


# ── get_status / clear ───────────────────────────────────────────────

def test_status_no_token(auth):
    status = auth.get_status()
    assert status.has_token is False
    assert status.is_expired is True
    assert status.seconds_remaining is None


def test_status_valid_token(auth):
    auth._cached = CachedToken(token="tok", expires_at=datetime.now() + timedelta(hours=1))

    status = auth.get_status()
    assert status.has_token is True
    assert status.is_expired is False
    assert status.seconds_remaining > 0


def test_status_expired_token(auth):
    auth._cached = CachedToken(token="tok", expires_at=datetime.now() - timedelta(hours=1))

    status = auth.get_status()
    assert status.has_token is True
    assert status.is_expired is True


def test_clear_drops_token(auth):
    auth._cached = CachedToken(token="tok", expires_at=datetime.now() + timedelta(hours=1))
    auth.clear()
    assert auth.get_status().has_token is False
