"""
Stripe provider, built on the official ``stripe`` SDK.
"""

from .client import StripeClient
from .port import StripePort, StripeSdkPort
from .token import StripeTokenProvider
from .webhooks import StripeWebhookHandler

__all__ = ["StripeClient", "StripePort", "StripeSdkPort", "StripeTokenProvider", "StripeWebhookHandler"]
