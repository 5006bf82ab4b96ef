"""
PayPal webhook verification and event normalization.
"""

import json
import logging
from typing import Any, Callable, Mapping

from ...config import PayPalConfig
from ...exceptions import (
    ApiError,
    ConfigurationError,
    MalformedPayloadError,
    SignatureError,
)
from ...models import WebhookEventStatus, WebhookResponse
from ...utils import deep_get, normalize_headers
from .transport import PayPalTransport

logger = logging.getLogger(__name__)

VERIFY_PATH = "/v1/notifications/verify-webhook-signature"

# Verification request field -> transmission header
SIGNATURE_HEADERS = {
    "auth_algo": "paypal-auth-algo",
    "cert_url": "paypal-cert-url",
    "transmission_id": "paypal-transmission-id",
    "transmission_sig": "paypal-transmission-sig",
    "transmission_time": "paypal-transmission-time",
}


def _payment_completed(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.COMPLETED.value,
        "transaction_id": resource.get("id"),
        "amount": deep_get(resource, "amount.total"),
        "currency": deep_get(resource, "amount.currency"),
    }


def _payment_denied(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.DENIED.value,
        "transaction_id": resource.get("id"),
        "reason": resource.get("state_reason") or "Unknown",
    }


def _payment_refunded(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.REFUNDED.value,
        "transaction_id": resource.get("id"),
        "refund_id": resource.get("refund_id"),
        "amount": deep_get(resource, "amount.total"),
        "currency": deep_get(resource, "amount.currency"),
    }


def _subscription_created(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.CREATED.value,
        "subscription_id": resource.get("id"),
        "plan_id": resource.get("plan_id"),
        "start_time": resource.get("start_time"),
    }


def _subscription_cancelled(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.CANCELLED.value,
        "subscription_id": resource.get("id"),
        "cancel_time": resource.get("status_update_time"),
    }


def _subscription_suspended(resource: Mapping[str, Any]) -> dict:
    return {
        "status": WebhookEventStatus.SUSPENDED.value,
        "subscription_id": resource.get("id"),
        "suspend_time": resource.get("status_update_time"),
    }


EVENT_HANDLERS: dict[str, Callable[[Mapping[str, Any]], dict]] = {
    "PAYMENT.SALE.COMPLETED": _payment_completed,
    "PAYMENT.SALE.DENIED": _payment_denied,
    "PAYMENT.SALE.REFUNDED": _payment_refunded,
    "BILLING.SUBSCRIPTION.CREATED": _subscription_created,
    "BILLING.SUBSCRIPTION.CANCELLED": _subscription_cancelled,
    "BILLING.SUBSCRIPTION.SUSPENDED": _subscription_suspended,
}


class PayPalWebhookHandler:
    """
    Verifies PayPal webhook notifications and maps them to normalized records.

    Verification is delegated to PayPal's verify-webhook-signature endpoint, so
    every verified notification costs one outbound call.
    """

    def __init__(self, config: PayPalConfig, transport: PayPalTransport):
        self.config = config
        self.transport = transport

    @staticmethod
    def decode_payload(payload: Any) -> dict:
        """Decode a raw body (str/bytes) or accept an already-decoded mapping."""
        if isinstance(payload, Mapping):
            event = dict(payload)
        else:
            if isinstance(payload, (bytes, bytearray)):
                try:
                    payload = payload.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise MalformedPayloadError("Invalid webhook payload", provider="paypal") from e
            if not isinstance(payload, str):
                raise MalformedPayloadError("Invalid webhook payload", provider="paypal")
            try:
                event = json.loads(payload)
            except ValueError as e:
                raise MalformedPayloadError("Invalid webhook payload", provider="paypal") from e
        if not isinstance(event, dict) or not event:
            raise MalformedPayloadError("Invalid webhook payload", provider="paypal")
        return event

    def verify_signature(self, event: dict, headers: Mapping[str, Any]) -> None:
        """
        Ask PayPal whether this notification is authentic.

        Raises:
            ConfigurationError: If no webhook_id is configured
            SignatureError: If a transmission header is missing or verification does not succeed
            TransportError: If the verification call cannot be made
        """
        if not self.config.webhook_id:
            raise ConfigurationError("PayPal webhook_id is not configured", config_key="webhook_id")

        lowered = normalize_headers(headers)
        verification: dict[str, Any] = {}
        for field_name, header in SIGNATURE_HEADERS.items():
            value = lowered.get(header)
            if not value:
                raise SignatureError(f"Missing webhook header: {header.upper()}", provider="paypal")
            verification[field_name] = value
        verification["webhook_id"] = self.config.webhook_id
        verification["webhook_event"] = event

        try:
            result = self.transport.post(VERIFY_PATH, json=verification)
        except ApiError as e:
            raise SignatureError(
                f"Webhook signature verification request failed (HTTP {e.status})",
                provider="paypal",
            ) from e

        status = result.get("verification_status") if isinstance(result, dict) else None
        if status != "SUCCESS":
            raise SignatureError(
                "Webhook signature verification failed",
                provider="paypal",
                verification_status=status,
            )

    @staticmethod
    def normalize_event(event: Mapping[str, Any]) -> dict:
        event_type = event.get("event_type")
        handler = EVENT_HANDLERS.get(event_type) if isinstance(event_type, str) else None
        if handler is None:
            logger.info("Unhandled PayPal webhook event type: %s", event_type)
            return {
                "status": WebhookEventStatus.UNHANDLED.value,
                "message": f"Unhandled webhook event type: {event_type}",
            }
        resource = event.get("resource")
        return handler(resource if isinstance(resource, Mapping) else {})

    def handle_webhook(self, payload: Any, headers: Mapping[str, Any]) -> dict:
        """
        Verify a notification and return its normalized form.

        Args:
            payload: Raw request body (str or bytes) or the decoded event
            headers: Request headers; names are matched case-insensitively

        Returns:
            A dict with ``status`` and the fields for that event type

        Raises:
            MalformedPayloadError: If the body is not a JSON object
            ConfigurationError: If no webhook_id is configured
            SignatureError: If the notification cannot be verified
        """
        event = self.decode_payload(payload)
        self.verify_signature(event, headers)
        normalized = self.normalize_event(event)
        logger.info("PayPal webhook %s processed: %s", event.get("id"), normalized["status"])
        return normalized

    def process_notification(self, payload: Any, headers: Mapping[str, Any]) -> WebhookResponse:
        """Like :meth:`handle_webhook`, but answers with a status-coded response instead of raising."""
        try:
            normalized = self.handle_webhook(payload, headers)
        except (SignatureError, MalformedPayloadError) as e:
            logger.warning("Rejected PayPal webhook: %s", e.message)
            return WebhookResponse(400, e.message)
        except Exception as e:
            logger.exception("Error processing PayPal webhook: %s", e)
            return WebhookResponse(500, "Error processing webhook")
        return WebhookResponse(200, "Webhook processed successfully", data=normalized)
