"""
Stripe payment intents and refunds.
"""

import logging
from typing import Any, Mapping, Optional

from ...exceptions import ValidationError
from ...utils import parse_amount, require_fields, require_identifier
from ..base import TokenProvider
from .port import StripePort

logger = logging.getLogger(__name__)


class StripePaymentProvider:
    def __init__(self, token_provider: TokenProvider, port: StripePort):
        self.token_provider = token_provider
        self.port = port

    def create_payment_intent(self, payment_data: Mapping[str, Any]) -> Any:
        """
        Create a PaymentIntent. ``payment_data`` is passed through as Stripe parameters.

        Raises:
            ValidationError: If ``amount`` or ``currency`` is missing, or amount is not positive
            ApiError: If Stripe rejects the request
        """
        require_fields(payment_data, ("amount", "currency"), context="payment")
        if parse_amount(payment_data["amount"]) <= 0:
            raise ValidationError("Amount must be a positive number", field="amount", value=payment_data["amount"])
        intent = self.port.create_payment_intent(self.token_provider.get_access_token(), dict(payment_data))
        logger.info("Stripe payment intent created: %s", getattr(intent, "id", None))
        return intent

    def capture_payment_intent(self, payment_id: str) -> Any:
        require_identifier(payment_id, "payment_id")
        return self.port.capture_payment_intent(self.token_provider.get_access_token(), payment_id)

    def refund_payment(self, payment_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        """Refund a payment intent; omit ``amount`` for a full refund."""
        require_identifier(payment_id, "payment_id")
        refund_data = refund_data or {}
        refund = self.port.create_refund(
            self.token_provider.get_access_token(),
            payment_intent=payment_id,
            amount=refund_data.get("amount"),
            reason=refund_data.get("reason"),
            metadata=refund_data.get("metadata"),
        )
        logger.info("Stripe refund requested for payment intent %s", payment_id)
        return refund
