"""
Unified Payments SDK

One interface over the PayPal REST API and the Stripe SDK for payments,
refunds, subscriptions and webhooks.
"""

from . import config, exceptions, models, utils
from .exceptions import (
    ApiError,
    AuthError,
    ConfigurationError,
    MalformedPayloadError,
    SignatureError,
    TransportError,
    UnifiedPaymentsError,
    UnsupportedProviderError,
    ValidationError,
)
from .gateway import (
    PayPalPaymentGateway,
    StripePaymentGateway,
    UnifiedPaymentClient,
    UnifiedPaymentFactory,
    UnifiedPaymentGateway,
    create_payment_client,
)
from .models import WebhookEventStatus, WebhookResponse
from .providers import PayPalClient, StripeClient, StripeWebhookEventHandler

__version__ = "1.0.0"

__all__ = [
    "UnifiedPaymentClient",
    "UnifiedPaymentFactory",
    "UnifiedPaymentGateway",
    "PayPalPaymentGateway",
    "StripePaymentGateway",
    "create_payment_client",
    "PayPalClient",
    "StripeClient",
    "StripeWebhookEventHandler",
    "WebhookEventStatus",
    "WebhookResponse",
    "UnifiedPaymentsError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "AuthError",
    "SignatureError",
    "ApiError",
    "UnsupportedProviderError",
    "MalformedPayloadError",
    "config",
    "exceptions",
    "models",
    "utils",
]
