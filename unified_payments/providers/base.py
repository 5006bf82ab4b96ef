"""
Abstract interfaces for payment providers.

Defines the capabilities every provider client exposes, plus the small
collaborator interfaces (token supply, Stripe webhook event processing) that
concrete providers are composed from.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class TokenProvider(ABC):
    """Supplies the bearer credential presented to a provider's API."""

    @abstractmethod
    def get_access_token(self) -> str:
        """Return a credential that is valid right now."""
        pass

    def get(self) -> str:
        return self.get_access_token()

    def invalidate(self) -> None:
        """Forget any cached credential. Stateless providers have nothing to drop."""
        return None


class ProviderApi(ABC):
    """Operations shared by every provider-specific client."""

    name: str = "provider"

    @abstractmethod
    def get_access_token(self) -> str:
        pass

    @abstractmethod
    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Refund a captured payment, fully or partially.

        Args:
            payment_id: Provider identifier of the sale / payment intent
            refund_data: Provider-specific refund fields (amount, reason, ...)

        Returns:
            The provider's decoded response
        """
        pass

    @abstractmethod
    def create_subscription(self, subscription_data: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def update_subscription(self, subscription_id: str, subscription_data: Any) -> Any:
        pass

    @abstractmethod
    def cancel_subscription(self, subscription_id: str) -> Any:
        pass


class PayPalApi(ProviderApi):
    """Capabilities of the PayPal REST client."""

    name = "paypal"

    @abstractmethod
    def create_payment(self, payment_data: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def capture_payment(self, payment_id: str) -> Any:
        pass

    @abstractmethod
    def execute_payment(self, payment_id: str, payer_id: str) -> Any:
        pass

    @abstractmethod
    def handle_webhook(self, payload: Any, headers: Mapping[str, Any]) -> dict:
        pass

    @abstractmethod
    def list_disputes(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        pass

    @abstractmethod
    def get_dispute(self, dispute_id: str) -> Any:
        pass

    @abstractmethod
    def accept_claim(self, dispute_id: str, claim_data: Optional[Mapping[str, Any]] = None) -> Any:
        pass

    @abstractmethod
    def respond_to_dispute(self, dispute_id: str, response: Mapping[str, Any]) -> Any:
        pass


class StripeApi(ProviderApi):
    """Capabilities of the Stripe SDK client."""

    name = "stripe"

    @abstractmethod
    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def capture_payment_intent(self, payment_id: str) -> Any:
        pass

    @abstractmethod
    def handle_webhook(self, payload: Any, signature_header: str) -> Any:
        pass


class StripeWebhookEventHandler(ABC):
    """Application hook that receives verified Stripe events."""

    @abstractmethod
    def process_webhook_event(self, event: dict) -> None:
        """
        Process a verified Stripe event.

        Args:
            event: The event as a plain dict (``id``, ``type``, ``data.object``, ...)

        Raises:
            Exception: Any error; the webhook handler reports it as a 500 response
        """
        pass
