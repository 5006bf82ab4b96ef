"""
Stripe subscriptions.
"""

import logging
from typing import Any, Mapping

from ...exceptions import ValidationError
from ...utils import require_identifier
from ..base import TokenProvider
from .port import StripePort

logger = logging.getLogger(__name__)


class StripeSubscriptionProvider:
    def __init__(self, token_provider: TokenProvider, port: StripePort):
        self.token_provider = token_provider
        self.port = port

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        if not isinstance(subscription_data, Mapping) or subscription_data.get("customer") is None:
            raise ValidationError("Missing required field: customer", field="customer")
        subscription = self.port.create_subscription(self.token_provider.get_access_token(), dict(subscription_data))
        logger.info("Stripe subscription created: %s", getattr(subscription, "id", None))
        return subscription

    def update_subscription(self, subscription_id: str, subscription_data: Mapping[str, Any]) -> Any:
        require_identifier(subscription_id, "subscription_id")
        if not isinstance(subscription_data, Mapping):
            raise ValidationError(
                "subscription_data must be a mapping",
                field="subscription_data",
                value=type(subscription_data).__name__,
            )
        return self.port.update_subscription(
            self.token_provider.get_access_token(), subscription_id, dict(subscription_data)
        )

    def cancel_subscription(self, subscription_id: str) -> Any:
        require_identifier(subscription_id, "subscription_id")
        result = self.port.cancel_subscription(self.token_provider.get_access_token(), subscription_id)
        logger.info("Stripe subscription cancelled: %s", subscription_id)
        return result
