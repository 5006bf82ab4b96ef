"""
PayPal subscription operations (v1 Billing Subscriptions API).
"""

import logging
from typing import Any, Mapping, Optional

from ...config import PayPalConfig
from ...exceptions import ValidationError
from ...utils import require_fields, require_identifier, truncate
from .transport import PayPalTransport

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_PATH = "/v1/billing/subscriptions"

DEFAULT_LOCALE = "en-US"
DEFAULT_SHIPPING_PREFERENCE = "NO_SHIPPING"
DEFAULT_USER_ACTION = "SUBSCRIBE_NOW"
DEFAULT_PAYER_SELECTED = "PAYPAL"
DEFAULT_PAYEE_PREFERRED = "IMMEDIATE_PAYMENT_REQUIRED"
DEFAULT_CANCEL_REASON = "Cancelled by merchant"
MAX_CANCEL_REASON_LENGTH = 128


class PayPalSubscriptionProvider:
    def __init__(self, config: PayPalConfig, transport: PayPalTransport):
        self.config = config
        self.transport = transport

    def build_subscription_payload(self, subscription_data: Mapping[str, Any]) -> dict:
        """
        Validate a subscription request and apply PayPal's defaults.

        Requires ``plan_id``, ``subscriber.name``, ``subscriber.email_address``,
        ``application_context.return_url`` and ``application_context.cancel_url``.
        """
        require_fields(subscription_data, ("plan_id", "subscriber", "application_context"), context="subscription")

        subscriber = subscription_data["subscriber"]
        if not isinstance(subscriber, Mapping) or subscriber.get("name") is None or subscriber.get("email_address") is None:
            raise ValidationError("Subscriber must have name and email_address", field="subscriber")

        context = subscription_data["application_context"]
        if not isinstance(context, Mapping) or context.get("return_url") is None or context.get("cancel_url") is None:
            raise ValidationError("Application context must have return_url and cancel_url", field="application_context")

        name = subscriber["name"] if isinstance(subscriber["name"], Mapping) else {}
        payment_method = context.get("payment_method") or {}

        payload: dict[str, Any] = {
            "plan_id": subscription_data["plan_id"],
            "subscriber": {
                "name": {
                    "given_name": name.get("given_name", ""),
                    "surname": name.get("surname", ""),
                },
                "email_address": subscriber["email_address"],
            },
            "application_context": {
                "return_url": context["return_url"],
                "cancel_url": context["cancel_url"],
                "brand_name": context.get("brand_name", ""),
                "locale": context.get("locale", DEFAULT_LOCALE),
                "shipping_preference": context.get("shipping_preference", DEFAULT_SHIPPING_PREFERENCE),
                "user_action": context.get("user_action", DEFAULT_USER_ACTION),
                "payment_method": {
                    "payer_selected": payment_method.get("payer_selected", DEFAULT_PAYER_SELECTED),
                    "payee_preferred": payment_method.get("payee_preferred", DEFAULT_PAYEE_PREFERRED),
                },
            },
        }
        if subscription_data.get("start_time") is not None:
            payload["start_time"] = subscription_data["start_time"]
        if subscription_data.get("shipping_address") is not None:
            payload["shipping_address"] = subscription_data["shipping_address"]
        return payload

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        payload = self.build_subscription_payload(subscription_data)
        result = self.transport.post(SUBSCRIPTIONS_PATH, json=payload)
        logger.info(
            "PayPal subscription created: %s (plan %s)",
            result.get("id") if isinstance(result, dict) else None,
            payload["plan_id"],
        )
        return result

    def update_subscription(self, subscription_id: str, subscription_data: Any) -> Any:
        """Send a PATCH; ``subscription_data`` is normally a list of JSON-patch operations."""
        require_identifier(subscription_id, "subscription_id")
        if not isinstance(subscription_data, (list, tuple, Mapping)):
            raise ValidationError(
                "subscription_data must be a list of patch operations or a mapping",
                field="subscription_data",
                value=type(subscription_data).__name__,
            )
        body = dict(subscription_data) if isinstance(subscription_data, Mapping) else list(subscription_data)
        return self.transport.patch(f"{SUBSCRIPTIONS_PATH}/{subscription_id}", json=body)

    def cancel_subscription(self, subscription_id: str, reason: Optional[str] = None) -> Any:
        """PayPal requires a reason of 1 to 128 characters; a blank one falls back to the default."""
        require_identifier(subscription_id, "subscription_id")
        reason = truncate((reason or "").strip() or DEFAULT_CANCEL_REASON, MAX_CANCEL_REASON_LENGTH)
        result = self.transport.post(f"{SUBSCRIPTIONS_PATH}/{subscription_id}/cancel", json={"reason": reason})
        logger.info("PayPal subscription cancelled: %s", subscription_id)
        return result
