"""
conftest.py: Shared pytest fixtures for the unified_payments test suite.

- Provider settings are never read from the developer's real environment.
- HTTP goes through a mocked ``requests.Session``; no test touches the network.

Usage:
    def test_something(paypal_client, http_session):
        http_session.request.return_value = make_response(201, {"id": "PAY-1"})
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from unified_payments.config import PayPalConfig, StripeConfig
from unified_payments.providers.paypal import PayPalClient

CONFIG_ENV_VARS = [
    "PAYPAL_CLIENT_ID",
    "PAYPAL_CLIENT_SECRET",
    "PAYPAL_SANDBOX",
    "PAYPAL_RETURN_URL",
    "PAYPAL_CANCEL_URL",
    "PAYPAL_WEBHOOK_ID",
    "PAYPAL_WEBHOOK_SECRET",
    "STRIPE_API_KEY",
    "STRIPE_SANDBOX",
    "STRIPE_SANDBOX_API_KEY",
    "STRIPE_WEBHOOK_SECRET",
    "UNIFIED_PAYMENTS_PROVIDER",
    "UnifiedPayments_EnabledProviders",
    "UnifiedPayments_Timeout",
    "UnifiedPayments_LogLevel",
    "UnifiedPayments_LogFile",
]


def make_response(status_code=200, body=None, text=None):
    """Build a stand-in for ``requests.Response``."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    if body is not None:
        raw = json.dumps(body)
        resp.json.return_value = body
    else:
        raw = text or ""
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    resp.text = raw
    resp.content = raw.encode("utf-8")
    return resp


def token_response(token="A21AAFakeToken", expires_in=32400):
    return make_response(200, {"access_token": token, "token_type": "Bearer", "expires_in": expires_in})


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep provider settings from the surrounding environment out of tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def http_session():
    """A mocked session whose token endpoint always succeeds."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = token_response()
    return session


@pytest.fixture
def paypal_config():
    return PayPalConfig(
        client_id="paypal-client-id",
        client_secret="paypal-client-secret",
        sandbox=True,
        webhook_id="WH-TEST-1",
    )


@pytest.fixture
def stripe_config():
    return StripeConfig(api_key="sk_live_abc123", sandbox_api_key="sk_test_abc123", stripe_webhook_secret="whsec_abc123")


@pytest.fixture
def paypal_client(paypal_config, http_session, clock):
    return PayPalClient(paypal_config, session=http_session, clock=clock)


@pytest.fixture
def response():
    """Factory fixture: ``response(status, body)`` builds a fake ``requests.Response``."""
    return make_response
