"""
PayPal REST client composed from the token provider and resource providers.
"""

import logging
import time
from typing import Any, Callable, Mapping, Optional

import requests

from ...config import PayPalConfig
from ...models import WebhookResponse
from ..base import PayPalApi
from .disputes import PayPalDisputeProvider
from .payments import PayPalPaymentProvider
from .subscriptions import PayPalSubscriptionProvider
from .token import PayPalTokenProvider
from .transport import PayPalTransport
from .webhooks import PayPalWebhookHandler

logger = logging.getLogger(__name__)


class PayPalClient(PayPalApi):
    """
    PayPal implementation of the provider API.

    All resource providers share one :class:`PayPalTransport`, so they share one
    HTTP session and one cached access token.
    """

    def __init__(
        self,
        config: PayPalConfig | Mapping[str, Any] | None = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = PayPalConfig.coerce(config)
        self.session = session or requests.Session()
        self.token_provider = PayPalTokenProvider(self.config, session=self.session, clock=clock)
        self.transport = PayPalTransport(self.config, self.token_provider, session=self.session)
        self.payments = PayPalPaymentProvider(self.config, self.transport)
        self.subscriptions = PayPalSubscriptionProvider(self.config, self.transport)
        self.disputes = PayPalDisputeProvider(self.transport)
        self.webhooks = PayPalWebhookHandler(self.config, self.transport)
        logger.debug("%s client initialized (%s)", self.name, self.config.environment)

    def get_access_token(self) -> str:
        return self.token_provider.get_access_token()

    def create_payment(self, payment_data: Mapping[str, Any]) -> Any:
        return self.payments.create_payment(payment_data)

    def capture_payment(self, payment_id: str, capture_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.payments.capture_payment(payment_id, capture_data)

    def execute_payment(self, payment_id: str, payer_id: str) -> Any:
        return self.payments.execute_payment(payment_id, payer_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.payments.refund_payment(payment_id, refund_data)

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        return self.subscriptions.create_subscription(subscription_data)

    def update_subscription(self, subscription_id: str, subscription_data: Any) -> Any:
        return self.subscriptions.update_subscription(subscription_id, subscription_data)

    def cancel_subscription(self, subscription_id: str, reason: Optional[str] = None) -> Any:
        return self.subscriptions.cancel_subscription(subscription_id, reason)

    def handle_webhook(self, payload: Any, headers: Mapping[str, Any]) -> dict:
        return self.webhooks.handle_webhook(payload, headers)

    def process_webhook(self, payload: Any, headers: Mapping[str, Any]) -> WebhookResponse:
        return self.webhooks.process_notification(payload, headers)

    def list_disputes(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.disputes.list_disputes(params)

    def get_dispute(self, dispute_id: str) -> Any:
        return self.disputes.get_dispute(dispute_id)

    def accept_claim(self, dispute_id: str, claim_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.disputes.accept_claim(dispute_id, claim_data)

    def respond_to_dispute(self, dispute_id: str, response: Mapping[str, Any]) -> Any:
        """Submit supporting evidence for a dispute."""
        return self.disputes.provide_supporting_info(dispute_id, response)

    def close(self) -> None:
        self.session.close()
