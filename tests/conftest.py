"""Shared fixtures for the mpesa-sdk test suite."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mpesa_sdk.config import Config, Environment, Settings

PASS_KEY = "bfb279f9aa9bdbcf158e97dd71a467cd2e0c893059b10f78e6b72ada1ed2c919"


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(
        consumer_key="test-consumer-key",
        consumer_secret="test-consumer-secret",
        environment=Environment.SANDBOX,
        short_code="174379",
        pass_key=PASS_KEY,
        callback_base_url="https://example.test",
        timeout=5.0,
    )


@pytest.fixture
def fake_config(fake_settings) -> Config:
    return Config(settings=fake_settings)


@pytest.fixture
def mock_client(fake_config):
    """MagicMock standing in for MpesaClient."""
    client = MagicMock()
    client.config = fake_config
    client.post_json.return_value = {"ResponseCode": "0", "ResponseDescription": "Accept the service request successfully."}
    return client


@pytest.fixture
def mock_mpesa(fake_config):
    """MagicMock standing in for the Mpesa facade, with a real config."""
    mpesa = MagicMock()
    mpesa.config = fake_config
    return mpesa
