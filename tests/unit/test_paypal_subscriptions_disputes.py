import pytest

from unified_payments.exceptions import ValidationError
from unified_payments.gateway import PayPalPaymentGateway

SANDBOX = "https://api.sandbox.paypal.com"


def subscription_request():
    return {
        "plan_id": "P-5ML4271244454362WXNWU5NQ",
        "subscriber": {
            "name": {"given_name": "John", "surname": "Doe"},
            "email_address": "customer@example.com",
        },
        "application_context": {
            "return_url": "https://shop.example/return",
            "cancel_url": "https://shop.example/cancel",
        },
    }


def test_create_subscription_applies_defaults(paypal_client, http_session, response):
    http_session.request.return_value = response(201, {"id": "I-BW452GLLEP1G", "status": "APPROVAL_PENDING"})
    result = paypal_client.create_subscription(subscription_request())

    assert result["id"] == "I-BW452GLLEP1G"
    args, kwargs = http_session.request.call_args
    assert args == ("POST", f"{SANDBOX}/v1/billing/subscriptions")
    payload = kwargs["json"]
    assert payload["plan_id"] == "P-5ML4271244454362WXNWU5NQ"
    assert payload["subscriber"]["name"] == {"given_name": "John", "surname": "Doe"}
    context = payload["application_context"]
    assert context["locale"] == "en-US"
    assert context["shipping_preference"] == "NO_SHIPPING"
    assert context["user_action"] == "SUBSCRIBE_NOW"
    assert context["brand_name"] == ""
    assert context["payment_method"] == {
        "payer_selected": "PAYPAL",
        "payee_preferred": "IMMEDIATE_PAYMENT_REQUIRED",
    }
    assert "start_time" not in payload


def test_create_subscription_keeps_overrides(paypal_client):
    data = subscription_request()
    data["application_context"]["brand_name"] = "Acme"
    data["application_context"]["locale"] = "de-DE"
    data["start_time"] = "2026-11-01T00:00:00Z"
    payload = paypal_client.subscriptions.build_subscription_payload(data)
    assert payload["application_context"]["brand_name"] == "Acme"
    assert payload["application_context"]["locale"] == "de-DE"
    assert payload["start_time"] == "2026-11-01T00:00:00Z"


@pytest.mark.parametrize(
    "path",
    [
        ("plan_id",),
        ("subscriber", "name"),
        ("subscriber", "email_address"),
        ("application_context", "return_url"),
        ("application_context", "cancel_url"),
    ],
)
def test_create_subscription_missing_field(paypal_client, http_session, path):
    data = subscription_request()
    target = data
    for key in path[:-1]:
        target = target[key]
    del target[path[-1]]
    with pytest.raises(ValidationError):
        paypal_client.create_subscription(data)
    http_session.request.assert_not_called()


def test_update_subscription_sends_patch(paypal_client, http_session, response):
    http_session.request.return_value = response(204)
    patch_ops = [{"op": "replace", "path": "/plan/billing_cycles/@sequence==1/pricing_scheme/fixed_price"}]
    assert paypal_client.update_subscription("I-1", patch_ops) == {}
    args, kwargs = http_session.request.call_args
    assert args == ("PATCH", f"{SANDBOX}/v1/billing/subscriptions/I-1")
    assert kwargs["json"] == patch_ops


def test_update_subscription_rejects_scalar(paypal_client):
    with pytest.raises(ValidationError):
        paypal_client.update_subscription("I-1", "replace")


def test_cancel_subscription(paypal_client, http_session, response):
    http_session.request.return_value = response(204)
    paypal_client.cancel_subscription("I-1", reason="Customer request")
    args, kwargs = http_session.request.call_args
    assert args == ("POST", f"{SANDBOX}/v1/billing/subscriptions/I-1/cancel")
    assert kwargs["json"] == {"reason": "Customer request"}


def test_cancel_subscription_default_reason(paypal_client, http_session, response):
    http_session.request.return_value = response(204)
    paypal_client.cancel_subscription("I-1")
    assert http_session.request.call_args.kwargs["json"] == {"reason": "Cancelled by merchant"}
    paypal_client.cancel_subscription("I-1", reason="   ")
    assert http_session.request.call_args.kwargs["json"] == {"reason": "Cancelled by merchant"}


def test_cancel_subscription_reason_truncated(paypal_client, http_session, response):
    http_session.request.return_value = response(204)
    paypal_client.cancel_subscription("I-1", reason="x" * 200)
    assert http_session.request.call_args.kwargs["json"] == {"reason": "x" * 128}


def test_unified_cancel_sends_reason(paypal_client, http_session, response):
    http_session.request.return_value = response(204)
    gateway = PayPalPaymentGateway(client=paypal_client)
    gateway.cancel_subscription("I-1")
    assert http_session.request.call_args.kwargs["json"] == {"reason": "Cancelled by merchant"}


def test_list_disputes(paypal_client, http_session, response):
    http_session.request.return_value = response(200, {"items": [{"dispute_id": "PP-D-1"}]})
    result = paypal_client.list_disputes({"dispute_state": "REQUIRED_ACTION", "start_time": None})
    assert result["items"][0]["dispute_id"] == "PP-D-1"
    args, kwargs = http_session.request.call_args
    assert args == ("GET", f"{SANDBOX}/v1/customer/disputes")
    assert kwargs["params"] == {"dispute_state": "REQUIRED_ACTION"}


def test_get_dispute(paypal_client, http_session, response):
    http_session.request.return_value = response(200, {"dispute_id": "PP-D-1"})
    paypal_client.get_dispute("PP-D-1")
    args, _ = http_session.request.call_args
    assert args == ("GET", f"{SANDBOX}/v1/customer/disputes/PP-D-1")


def test_accept_claim(paypal_client, http_session, response):
    http_session.request.return_value = response(200, {"links": []})
    paypal_client.accept_claim("PP-D-1", {"note": "Refunding the buyer"})
    args, kwargs = http_session.request.call_args
    assert args == ("POST", f"{SANDBOX}/v1/customer/disputes/PP-D-1/accept-claim")
    assert kwargs["json"] == {"note": "Refunding the buyer"}


def test_respond_to_dispute_provides_supporting_info(paypal_client, http_session, response):
    http_session.request.return_value = response(200, {"links": []})
    evidence = {"notes": "Tracking number attached", "evidences": [{"evidence_type": "PROOF_OF_FULFILLMENT"}]}
    paypal_client.respond_to_dispute("PP-D-1", evidence)
    args, kwargs = http_session.request.call_args
    assert args == ("POST", f"{SANDBOX}/v1/customer/disputes/PP-D-1/provide-supporting-info")
    assert kwargs["json"] == evidence


def test_respond_to_dispute_requires_evidence(paypal_client, http_session):
    with pytest.raises(ValidationError):
        paypal_client.respond_to_dispute("PP-D-1", {})
    http_session.request.assert_not_called()
