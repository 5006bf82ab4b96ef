from unittest.mock import MagicMock

import pytest
import requests

from unified_payments.exceptions import ApiError, TransportError
from unified_payments.providers.base import TokenProvider
from unified_payments.providers.paypal.transport import PayPalTransport


class StaticToken(TokenProvider):
    def __init__(self):
        self.invalidated = False

    def get_access_token(self):
        return "static-token"

    def invalidate(self):
        self.invalidated = True


@pytest.fixture
def token():
    return StaticToken()


@pytest.fixture
def transport(paypal_config, token):
    return PayPalTransport(paypal_config, token, session=MagicMock(spec=requests.Session))


def test_request_sends_bearer_and_json(transport, response):
    transport.session.request.return_value = response(200, {"ok": True})
    assert transport.post("/v1/things", json={"a": 1}) == {"ok": True}
    args, kwargs = transport.session.request.call_args
    assert args == ("POST", "https://api.sandbox.paypal.com/v1/things")
    assert kwargs["headers"]["Authorization"] == "Bearer static-token"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["json"] == {"a": 1}
    assert kwargs["timeout"] == 30.0


def test_get_passes_query_params(transport, response):
    transport.session.request.return_value = response(200, {"items": []})
    transport.get("/v1/customer/disputes", params={"dispute_state": "OPEN_INQUIRIES"})
    _, kwargs = transport.session.request.call_args
    assert kwargs["params"] == {"dispute_state": "OPEN_INQUIRIES"}


def test_empty_success_body_decodes_to_empty_dict(transport, response):
    transport.session.request.return_value = response(204)
    assert transport.post("/v1/billing/subscriptions/I-1/cancel", json={"reason": ""}) == {}


def test_error_status_raises_api_error_with_body(transport, response):
    body = {"name": "INVALID_REQUEST", "message": "Request is not well-formed"}
    transport.session.request.return_value = response(400, body)
    with pytest.raises(ApiError) as exc:
        transport.post("/v1/payments/payment", json={})
    assert exc.value.status == 400
    assert exc.value.body == body
    assert exc.value.provider == "paypal"


def test_unauthorized_invalidates_token(transport, token, response):
    transport.session.request.return_value = response(401, {"error": "invalid_token"})
    with pytest.raises(ApiError):
        transport.get("/v1/customer/disputes")
    assert token.invalidated is True


def test_non_json_success_raises_api_error(transport, response):
    transport.session.request.return_value = response(200, text="<html></html>")
    with pytest.raises(ApiError):
        transport.get("/v1/customer/disputes")


@pytest.mark.parametrize(
    "error",
    [requests.exceptions.Timeout("timed out"), requests.exceptions.ConnectionError("refused")],
)
def test_network_failure_raises_transport_error(transport, error):
    transport.session.request.side_effect = error
    with pytest.raises(TransportError) as exc:
        transport.get("/v1/customer/disputes")
    assert exc.value.url == "https://api.sandbox.paypal.com/v1/customer/disputes"
