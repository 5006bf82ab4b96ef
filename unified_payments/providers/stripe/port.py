"""
Narrow interface over the Stripe SDK.

Resource providers only talk to a :class:`StripePort`, which keeps SDK calls in
one place and lets tests substitute an in-memory fake.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import stripe

from ...config import DEFAULT_TIMEOUT
from ...exceptions import ApiError, MalformedPayloadError, SignatureError
from ...utils import compact, redact_message

logger = logging.getLogger(__name__)


class StripePort(ABC):
    @abstractmethod
    def create_payment_intent(self, api_key: str, params: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def capture_payment_intent(self, api_key: str, payment_intent_id: str) -> Any:
        pass

    @abstractmethod
    def create_refund(
        self,
        api_key: str,
        payment_intent: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        pass

    @abstractmethod
    def create_subscription(self, api_key: str, params: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def update_subscription(self, api_key: str, subscription_id: str, params: Mapping[str, Any]) -> Any:
        pass

    @abstractmethod
    def cancel_subscription(self, api_key: str, subscription_id: str) -> Any:
        pass

    @abstractmethod
    def construct_webhook_event(self, payload: Any, signature_header: str, secret: str) -> dict:
        """
        Verify a webhook signature and return the event as a plain dict.

        Raises:
            SignatureError: If the signature does not match the payload
            MalformedPayloadError: If the payload is not valid JSON
        """
        pass


def _api_error(action: str, error: "stripe.StripeError") -> ApiError:
    message = redact_message(getattr(error, "user_message", None) or str(error))
    logger.error("Stripe %s failed: %s", action, message)
    return ApiError(
        f"Error {action}: {message}",
        provider="stripe",
        status=getattr(error, "http_status", None),
        body=getattr(error, "json_body", None),
    )


class StripeSdkPort(StripePort):
    """
    :class:`StripePort` backed by the ``stripe`` library.

    Each API key gets its own ``stripe.StripeClient`` sharing one
    ``stripe.RequestsClient`` bound to ``timeout``, so no module-level SDK
    state is touched.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.http_client = stripe.RequestsClient(timeout=timeout)
        self._clients: dict[str, stripe.StripeClient] = {}
        self._lock = threading.Lock()

    def client_for(self, api_key: str) -> "stripe.StripeClient":
        with self._lock:
            client = self._clients.get(api_key)
            if client is None:
                client = stripe.StripeClient(api_key, http_client=self.http_client)
                self._clients[api_key] = client
            return client

    def create_payment_intent(self, api_key: str, params: Mapping[str, Any]) -> Any:
        try:
            return self.client_for(api_key).v1.payment_intents.create(params=dict(params))
        except stripe.StripeError as e:
            raise _api_error("creating payment intent", e) from e

    def capture_payment_intent(self, api_key: str, payment_intent_id: str) -> Any:
        try:
            intents = self.client_for(api_key).v1.payment_intents
            intent = intents.retrieve(payment_intent_id)
            return intents.capture(intent.id)
        except stripe.StripeError as e:
            raise _api_error("capturing payment intent", e) from e

    def create_refund(
        self,
        api_key: str,
        payment_intent: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        params = compact(
            {
                "payment_intent": payment_intent,
                "amount": amount,
                "reason": reason,
                "metadata": dict(metadata) if metadata is not None else None,
            }
        )
        try:
            return self.client_for(api_key).v1.refunds.create(params=params)
        except stripe.StripeError as e:
            raise _api_error("processing refund", e) from e

    def create_subscription(self, api_key: str, params: Mapping[str, Any]) -> Any:
        try:
            return self.client_for(api_key).v1.subscriptions.create(params=dict(params))
        except stripe.StripeError as e:
            raise _api_error("creating subscription", e) from e

    def update_subscription(self, api_key: str, subscription_id: str, params: Mapping[str, Any]) -> Any:
        try:
            return self.client_for(api_key).v1.subscriptions.update(subscription_id, params=dict(params))
        except stripe.StripeError as e:
            raise _api_error("updating subscription", e) from e

    def cancel_subscription(self, api_key: str, subscription_id: str) -> Any:
        try:
            return self.client_for(api_key).v1.subscriptions.cancel(subscription_id)
        except stripe.StripeError as e:
            raise _api_error("cancelling subscription", e) from e

    def construct_webhook_event(self, payload: Any, signature_header: str, secret: str) -> dict:
        try:
            event = stripe.Webhook.construct_event(payload, signature_header, secret)
        except stripe.SignatureVerificationError as e:
            raise SignatureError(
                f"Stripe webhook signature verification failed: {e}",
                provider="stripe",
            ) from e
        except ValueError as e:
            raise MalformedPayloadError("Invalid webhook payload", provider="stripe") from e
        return event.to_dict() if hasattr(event, "to_dict") else dict(event)
