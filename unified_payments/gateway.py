"""
Provider-agnostic payment façade.

Calling code works against :class:`UnifiedPaymentClient`; the factory picks the
adapter for the configured provider and the adapter forwards each call to the
provider's client.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .config import (
    PROVIDER_PAYPAL,
    PROVIDER_STRIPE,
    VALID_PAYMENT_PROVIDERS,
    PayPalConfig,
    StripeConfig,
    is_provider_enabled,
    resolve_provider,
)
from .exceptions import ConfigurationError, UnsupportedProviderError
from .providers.base import StripeWebhookEventHandler
from .providers.paypal import PayPalClient
from .providers.stripe import StripeClient

logger = logging.getLogger(__name__)


class UnifiedPaymentGateway(ABC):
    """The operations every provider adapter supports."""

    @abstractmethod
    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def capture_payment_intent(self, payment_id: str) -> Any:
        pass

    @abstractmethod
    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        pass

    @abstractmethod
    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def cancel_subscription(self, subscription_id: str) -> Any:
        pass


class PayPalPaymentGateway(UnifiedPaymentGateway):
    def __init__(
        self,
        config: PayPalConfig | Mapping[str, Any] | None = None,
        client: Optional[PayPalClient] = None,
    ):
        self.client = client or PayPalClient(config)

    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        return self.client.create_payment(payment_data)

    def capture_payment_intent(self, payment_id: str) -> Any:
        return self.client.capture_payment(payment_id)

    def execute_payment_intent(self, payment_id: str, payer_id: str) -> Any:
        """Execute a buyer-approved payment. PayPal only."""
        return self.client.execute_payment(payment_id, payer_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.refund_payment(payment_id, refund_data)

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        return self.client.create_subscription(subscription_data)

    def cancel_subscription(self, subscription_id: str) -> Any:
        return self.client.cancel_subscription(subscription_id)


class StripePaymentGateway(UnifiedPaymentGateway):
    def __init__(
        self,
        config: StripeConfig | Mapping[str, Any] | None = None,
        client: Optional[StripeClient] = None,
        event_handler: Optional[StripeWebhookEventHandler] = None,
    ):
        self.client = client or StripeClient(config, event_handler=event_handler)

    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        return self.client.create_payment_intent(payment_data)

    def capture_payment_intent(self, payment_id: str) -> Any:
        return self.client.capture_payment_intent(payment_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.refund_payment(payment_id, refund_data)

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        return self.client.create_subscription(subscription_data)

    def cancel_subscription(self, subscription_id: str) -> Any:
        return self.client.cancel_subscription(subscription_id)


class UnifiedPaymentClient:
    """Forwards every call unchanged to the wrapped gateway."""

    def __init__(self, gateway: UnifiedPaymentGateway):
        self.gateway = gateway

    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        return self.gateway.create_payment_intent(payment_data)

    def capture_payment_intent(self, payment_id: str) -> Any:
        return self.gateway.capture_payment_intent(payment_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        return self.gateway.refund_payment(payment_id, refund_data)

    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        return self.gateway.create_subscription(subscription_data)

    def cancel_subscription(self, subscription_id: str) -> Any:
        return self.gateway.cancel_subscription(subscription_id)


class UnifiedPaymentFactory:
    @staticmethod
    def create(config: Optional[Mapping[str, Any]] = None, **kwargs) -> UnifiedPaymentClient:
        """
        Build a client for the provider named by ``config["provider"]``.

        Args:
            config: Provider selector plus that provider's settings
            **kwargs: Extra adapter arguments (``event_handler`` for Stripe)

        Returns:
            UnifiedPaymentClient: Client wrapping the selected adapter

        Raises:
            UnsupportedProviderError: If the provider is not ``paypal`` or ``stripe``
            ConfigurationError: If the provider is disabled or its settings are incomplete
        """
        config = dict(config or {})
        provider = resolve_provider(config)
        if provider not in VALID_PAYMENT_PROVIDERS:
            raise UnsupportedProviderError(
                f"Unsupported payment provider: {provider}",
                provider=provider,
                supported_providers=sorted(VALID_PAYMENT_PROVIDERS),
            )
        if not is_provider_enabled(provider):
            raise ConfigurationError(
                f"Payment provider '{provider}' is disabled in configuration",
                config_key="UnifiedPayments_EnabledProviders",
                actual_value=provider,
            )

        gateway: UnifiedPaymentGateway
        if provider == PROVIDER_PAYPAL:
            gateway = PayPalPaymentGateway(PayPalConfig.from_mapping(config))
        elif provider == PROVIDER_STRIPE:
            gateway = StripePaymentGateway(StripeConfig.from_mapping(config), event_handler=kwargs.get("event_handler"))
        logger.info("Created %s payment client", provider)
        return UnifiedPaymentClient(gateway)


def create_payment_client(provider: str, **options) -> UnifiedPaymentClient:
    """
    Convenience wrapper over :meth:`UnifiedPaymentFactory.create`.

    Example:
        client = create_payment_client("stripe", api_key="sk_test_...")
    """
    event_handler = options.pop("event_handler", None)
    return UnifiedPaymentFactory.create({"provider": provider, **options}, event_handler=event_handler)
