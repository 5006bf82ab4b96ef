"""
Stripe webhook verification and dispatch.
"""

import logging
from typing import Any, Mapping

from ...config import StripeConfig
from ...exceptions import ConfigurationError, MalformedPayloadError, SignatureError
from ...models import WebhookResponse
from ..base import StripeWebhookEventHandler
from .port import StripePort

logger = logging.getLogger(__name__)


class StripeWebhookHandler:
    """
    Verifies Stripe webhook deliveries and hands the event to the application.

    :meth:`handle_webhook` never raises; the outcome is reported as a
    :class:`WebhookResponse` suitable for returning from an HTTP endpoint.
    """

    def __init__(
        self,
        config: StripeConfig | Mapping[str, Any] | None,
        event_handler: StripeWebhookEventHandler,
        port: StripePort,
    ):
        self.config = StripeConfig.coerce(config)
        if not self.config.stripe_webhook_secret:
            raise ConfigurationError(
                "Stripe webhook secret is required in configuration",
                config_key="stripe_webhook_secret",
            )
        self.event_handler = event_handler
        self.port = port

    def handle_webhook(self, payload: Any, signature_header: str) -> WebhookResponse:
        try:
            event = self.port.construct_webhook_event(payload, signature_header, self.config.stripe_webhook_secret)
        except SignatureError as e:
            logger.warning("Stripe webhook signature verification failed: %s", e.message)
            return WebhookResponse(400, "Webhook signature verification failed")
        except MalformedPayloadError:
            logger.warning("Stripe webhook payload could not be parsed")
            return WebhookResponse(400, "Invalid webhook payload")
        except Exception as e:
            logger.exception("Error verifying Stripe webhook: %s", e)
            return WebhookResponse(500, "Error processing webhook")

        try:
            self.event_handler.process_webhook_event(event)
        except Exception as e:
            logger.exception("Error processing Stripe webhook %s: %s", event.get("id"), e)
            return WebhookResponse(500, "Error processing webhook")

        logger.info("Stripe webhook %s (%s) processed", event.get("id"), event.get("type"))
        return WebhookResponse(200, "Webhook processed successfully")
