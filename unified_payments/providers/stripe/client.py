"""
Stripe client composed from the key provider, SDK port and resource providers.
"""

import logging
from typing import Any, Mapping, Optional

from ...config import StripeConfig
from ...exceptions import ConfigurationError
from ...models import WebhookResponse
from ..base import StripeApi, StripeWebhookEventHandler
from .payments import StripePaymentProvider
from .port import StripePort, StripeSdkPort
from .subscriptions import StripeSubscriptionProvider
from .token import StripeTokenProvider
from .webhooks import StripeWebhookHandler

logger = logging.getLogger(__name__)


class StripeClient(StripeApi):
    """
    Stripe implementation of the provider API.

    Webhook handling is optional: it is wired only when both an event handler
    and ``stripe_webhook_secret`` are available.
    """

    def __init__(
        self,
        config: StripeConfig | Mapping[str, Any] | None = None,
        event_handler: Optional[StripeWebhookEventHandler] = None,
        port: Optional[StripePort] = None,
    ):
        self.config = StripeConfig.coerce(config)
        self.port = port or StripeSdkPort(timeout=self.config.timeout)
        self.token_provider = StripeTokenProvider(self.config)
        self.payments = StripePaymentProvider(self.token_provider, self.port)
        self.subscriptions = StripeSubscriptionProvider(self.token_provider, self.port)
        self.webhooks: Optional[StripeWebhookHandler] = None
        if event_handler is not None:
            self.webhooks = StripeWebhookHandler(self.config, event_handler, self.port)
        logger.debug("%s client initialized (%s)", self.name, self.config.environment)

    def get_access_token(self) -> str:
        return self.token_provider.get_access_token()

    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        return self.payments.create_payment_intent(payment_data)

    def capture_payment_intent(self, payment_id: str) -> Any:
        return self.payments.capture_payment_intent(payment_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.payments.refund_payment(payment_id, refund_data)

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        return self.subscriptions.create_subscription(subscription_data)

    def update_subscription(self, subscription_id: str, subscription_data: Any) -> Any:
        return self.subscriptions.update_subscription(subscription_id, subscription_data)

    def cancel_subscription(self, subscription_id: str) -> Any:
        return self.subscriptions.cancel_subscription(subscription_id)

    def handle_webhook(self, payload: Any, signature_header: str) -> WebhookResponse:
        if self.webhooks is None:
            raise ConfigurationError(
                "Stripe webhook handling requires an event handler",
                config_key="event_handler",
            )
        return self.webhooks.handle_webhook(payload, signature_header)
