"""
PayPal payment operations (v1 Payments API: create, capture, execute, refund).
"""

import logging
from typing import Any, Mapping, Optional

from ...config import PAYPAL_DEFAULT_CANCEL_URL, PAYPAL_DEFAULT_RETURN_URL, PayPalConfig
from ...exceptions import ValidationError
from ...utils import format_minor_units, parse_amount, require_fields, require_identifier, truncate
from .transport import PayPalTransport

logger = logging.getLogger(__name__)

PAYMENT_PATH = "/v1/payments/payment"
SALE_PATH = "/v1/payments/sale"

# PayPal rejects descriptions and item names longer than this.
MAX_TEXT_LENGTH = 127


class PayPalPaymentProvider:
    """Builds v1 payment payloads from generic request dicts and sends them."""

    REQUIRED_FIELDS = ("amount", "currency", "description")

    def __init__(self, config: PayPalConfig, transport: PayPalTransport):
        self.config = config
        self.transport = transport

    def build_payment_payload(self, payment_data: Mapping[str, Any]) -> dict:
        """
        Validate a payment request and translate it to PayPal's wire shape.

        ``amount`` (and item ``price``) are integer minor units, e.g. 1999 for 19.99.

        Raises:
            ValidationError: If a required field is missing or the amount is not a positive number
        """
        require_fields(payment_data, self.REQUIRED_FIELDS, context="payment")

        amount = parse_amount(payment_data["amount"])
        if amount <= 0:
            raise ValidationError("Amount must be a positive number", field="amount", value=payment_data["amount"])

        transaction: dict[str, Any] = {
            "amount": {
                "total": format_minor_units(amount),
                "currency": str(payment_data["currency"]).upper(),
            },
            "description": truncate(payment_data["description"], MAX_TEXT_LENGTH),
            "item_list": {
                "items": self._format_line_items(payment_data.get("items") or []),
            },
        }
        if payment_data.get("shipping_address") is not None:
            transaction["item_list"]["shipping_address"] = payment_data["shipping_address"]
        if payment_data.get("invoice_number") is not None:
            transaction["invoice_number"] = payment_data["invoice_number"]

        return {
            "intent": "sale",
            "redirect_urls": {
                "return_url": payment_data.get("return_url") or self.config.return_url or PAYPAL_DEFAULT_RETURN_URL,
                "cancel_url": payment_data.get("cancel_url") or self.config.cancel_url or PAYPAL_DEFAULT_CANCEL_URL,
            },
            "payer": {"payment_method": "paypal"},
            "transactions": [transaction],
        }

    @staticmethod
    def _format_line_items(items: Any) -> list[dict]:
        if not isinstance(items, (list, tuple)):
            raise ValidationError("items must be a list", field="items", value=type(items).__name__)
        formatted = []
        for index, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise ValidationError(f"items[{index}] must be a mapping", field="items", value=item)
            formatted.append(
                {
                    "name": truncate(item.get("name", ""), MAX_TEXT_LENGTH),
                    "quantity": item.get("quantity", 1),
                    "price": format_minor_units(item.get("price", 0), field=f"items[{index}].price"),
                    "currency": str(item.get("currency") or "USD").upper(),
                    "sku": item.get("sku"),
                }
            )
        return formatted

    def create_payment(self, payment_data: Mapping[str, Any]) -> Any:
        """Create a ``sale`` payment and return PayPal's response (including approval links)."""
        payload = self.build_payment_payload(payment_data)
        result = self.transport.post(PAYMENT_PATH, json=payload)
        logger.info(
            "PayPal payment created: %s (%s %s)",
            result.get("id") if isinstance(result, dict) else None,
            payload["transactions"][0]["amount"]["total"],
            payload["transactions"][0]["amount"]["currency"],
        )
        return result

    def capture_payment(self, payment_id: str, capture_data: Optional[Mapping[str, Any]] = None) -> Any:
        require_identifier(payment_id, "payment_id")
        return self.transport.post(f"{PAYMENT_PATH}/{payment_id}/capture", json=dict(capture_data) if capture_data else None)

    def execute_payment(self, payment_id: str, payer_id: str) -> Any:
        """Execute a payment the buyer approved (legacy approve-and-execute flow)."""
        require_identifier(payment_id, "payment_id")
        require_identifier(payer_id, "payer_id")
        return self.transport.post(f"{PAYMENT_PATH}/{payment_id}/execute", json={"payer_id": payer_id})

    def refund_payment(self, sale_id: str, refund_data: Optional[Mapping[str, Any]] = None) -> Any:
        """Refund a completed sale. ``refund_data`` is sent as-is; empty means full refund."""
        require_identifier(sale_id, "sale_id")
        result = self.transport.post(f"{SALE_PATH}/{sale_id}/refund", json=dict(refund_data or {}))
        logger.info("PayPal refund requested for sale %s", sale_id)
        return result
