"""
PayPal REST API provider.
"""

from .client import PayPalClient
from .token import PayPalTokenProvider
from .transport import PayPalTransport
from .webhooks import PayPalWebhookHandler

__all__ = ["PayPalClient", "PayPalTokenProvider", "PayPalTransport", "PayPalWebhookHandler"]
