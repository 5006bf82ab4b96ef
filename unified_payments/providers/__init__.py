"""
Payment provider clients.
"""

from .base import PayPalApi, ProviderApi, StripeApi, StripeWebhookEventHandler, TokenProvider
from .paypal import PayPalClient
from .stripe import StripeClient

__all__ = [
    "TokenProvider",
    "ProviderApi",
    "PayPalApi",
    "StripeApi",
    "StripeWebhookEventHandler",
    "PayPalClient",
    "StripeClient",
]
