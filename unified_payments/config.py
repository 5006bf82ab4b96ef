"""
Configuration module for the Unified Payments SDK.

Provider configuration is read from a mapping supplied by the caller, with
environment variables as fallback. Configuration objects are immutable once built.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .exceptions import ConfigurationError
from .utils import parse_bool

logger = logging.getLogger(__name__)

PROVIDER_PAYPAL = "paypal"
PROVIDER_STRIPE = "stripe"
VALID_PAYMENT_PROVIDERS = {PROVIDER_PAYPAL, PROVIDER_STRIPE}
DEFAULT_ENABLED_PROVIDERS = "paypal,stripe"

DEFAULT_TIMEOUT = 30.0

PAYPAL_LIVE_BASE_URL = "https://api.paypal.com"
PAYPAL_SANDBOX_BASE_URL = "https://api.sandbox.paypal.com"
PAYPAL_DEFAULT_RETURN_URL = "https://example.com/return"
PAYPAL_DEFAULT_CANCEL_URL = "https://example.com/cancel"

MAX_ENABLED_PROVIDERS_LENGTH = 200


def _parse_enabled_providers(raw: str) -> List[str]:
    """
    Split ``UnifiedPayments_EnabledProviders`` into provider names.

    Names are lower-cased, blanks and duplicates dropped, order kept.

    Raises:
        ValueError: On control characters, an oversized value or an unknown provider
    """
    if len(raw) > MAX_ENABLED_PROVIDERS_LENGTH:
        raise ValueError(f"enabled providers value too long ({len(raw)} chars)")
    if not raw.isprintable():
        raise ValueError("enabled providers value contains control characters")

    providers: List[str] = []
    for name in (part.strip().lower() for part in raw.split(",")):
        if not name or name in providers:
            continue
        if name not in VALID_PAYMENT_PROVIDERS:
            raise ValueError(f"unknown provider '{name}' (expected one of {', '.join(sorted(VALID_PAYMENT_PROVIDERS))})")
        providers.append(name)
    return providers


def get_enabled_providers() -> List[str]:
    """Get enabled payment providers from ``UnifiedPayments_EnabledProviders``."""
    try:
        providers = _parse_enabled_providers(os.getenv("UnifiedPayments_EnabledProviders", DEFAULT_ENABLED_PROVIDERS))
    except ValueError as e:
        logger.error("Failed to parse provider configuration: %s. Using all providers.", e)
        return sorted(VALID_PAYMENT_PROVIDERS)
    if not providers:
        logger.warning("No payment providers enabled. Enabling all providers as fallback.")
        return sorted(VALID_PAYMENT_PROVIDERS)
    return providers


def is_provider_enabled(provider_name: str) -> bool:
    """Check if a specific payment provider is enabled."""
    if not isinstance(provider_name, str):
        return False
    return provider_name.lower() in get_enabled_providers()


def _resolve_timeout(value: Any) -> float:
    raw = value if value is not None else os.getenv("UnifiedPayments_Timeout")
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError("timeout must be a positive number", config_key="timeout", actual_value=str(raw))
    if timeout <= 0:
        raise ConfigurationError("timeout must be a positive number", config_key="timeout", actual_value=str(raw))
    return timeout


def _pick(mapping: Mapping[str, Any], key: str, env_var: str) -> Optional[str]:
    value = mapping.get(key)
    if value is None or value == "":
        value = os.getenv(env_var) or None
    return value


@dataclass(frozen=True)
class PayPalConfig:
    """Credentials and environment flags for the PayPal REST API."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    sandbox: bool = False
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    webhook_id: Optional[str] = None
    webhook_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return PAYPAL_SANDBOX_BASE_URL if self.sandbox else PAYPAL_LIVE_BASE_URL

    @property
    def environment(self) -> str:
        return "sandbox" if self.sandbox else "live"

    def require_credentials(self) -> None:
        if not self.client_id or not isinstance(self.client_id, str):
            raise ConfigurationError("PayPal client_id is required", config_key="client_id")
        if not self.client_secret or not isinstance(self.client_secret, str):
            raise ConfigurationError("PayPal client_secret is required", config_key="client_secret")

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "PayPalConfig":
        """Build from a config mapping, falling back to ``PAYPAL_*`` environment variables."""
        mapping = mapping or {}
        sandbox = mapping.get("sandbox")
        return cls(
            client_id=_pick(mapping, "client_id", "PAYPAL_CLIENT_ID"),
            client_secret=_pick(mapping, "client_secret", "PAYPAL_CLIENT_SECRET"),
            sandbox=parse_bool(sandbox if sandbox is not None else os.getenv("PAYPAL_SANDBOX")),
            return_url=_pick(mapping, "return_url", "PAYPAL_RETURN_URL"),
            cancel_url=_pick(mapping, "cancel_url", "PAYPAL_CANCEL_URL"),
            webhook_id=_pick(mapping, "webhook_id", "PAYPAL_WEBHOOK_ID"),
            webhook_secret=_pick(mapping, "webhook_secret", "PAYPAL_WEBHOOK_SECRET"),
            timeout=_resolve_timeout(mapping.get("timeout")),
        )

    @classmethod
    def from_env(cls) -> "PayPalConfig":
        return cls.from_mapping({})

    @classmethod
    def coerce(cls, config: "PayPalConfig | Mapping[str, Any] | None") -> "PayPalConfig":
        return config if isinstance(config, cls) else cls.from_mapping(config)

    def summary(self) -> dict:
        return {
            "provider": PROVIDER_PAYPAL,
            "environment": self.environment,
            "base_url": self.base_url,
            "client_id_set": bool(self.client_id),
            "client_secret_set": bool(self.client_secret),
            "webhook_id_set": bool(self.webhook_id),
            "return_url": self.return_url,
            "cancel_url": self.cancel_url,
            "timeout": self.timeout,
        }


@dataclass(frozen=True)
class StripeConfig:
    """API keys and webhook secret for the Stripe SDK."""

    api_key: Optional[str] = None
    sandbox: bool = False
    sandbox_api_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def environment(self) -> str:
        return "sandbox" if self.sandbox else "live"

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "StripeConfig":
        """Build from a config mapping, falling back to ``STRIPE_*`` environment variables."""
        mapping = mapping or {}
        sandbox = mapping.get("sandbox")
        return cls(
            api_key=_pick(mapping, "api_key", "STRIPE_API_KEY"),
            sandbox=parse_bool(sandbox if sandbox is not None else os.getenv("STRIPE_SANDBOX")),
            sandbox_api_key=_pick(mapping, "sandbox_api_key", "STRIPE_SANDBOX_API_KEY"),
            stripe_webhook_secret=_pick(mapping, "stripe_webhook_secret", "STRIPE_WEBHOOK_SECRET"),
            timeout=_resolve_timeout(mapping.get("timeout")),
        )

    @classmethod
    def from_env(cls) -> "StripeConfig":
        return cls.from_mapping({})

    @classmethod
    def coerce(cls, config: "StripeConfig | Mapping[str, Any] | None") -> "StripeConfig":
        return config if isinstance(config, cls) else cls.from_mapping(config)

    def summary(self) -> dict:
        return {
            "provider": PROVIDER_STRIPE,
            "environment": self.environment,
            "api_key_set": bool(self.api_key),
            "sandbox_api_key_set": bool(self.sandbox_api_key),
            "webhook_secret_set": bool(self.stripe_webhook_secret),
            "timeout": self.timeout,
        }


def resolve_provider(config: Optional[Mapping[str, Any]] = None) -> Optional[str]:
    """Return the lower-cased ``provider`` selector, falling back to ``UNIFIED_PAYMENTS_PROVIDER``."""
    value = (config or {}).get("provider") or os.getenv("UNIFIED_PAYMENTS_PROVIDER")
    return value.strip().lower() if isinstance(value, str) else value


def get_config_summary(config: Optional[Mapping[str, Any]] = None) -> dict:
    """Get a redaction-safe summary of the effective configuration."""
    provider = resolve_provider(config)
    summary: dict[str, Any] = {
        "provider": provider,
        "enabled_providers": get_enabled_providers(),
        "valid_payment_providers": sorted(VALID_PAYMENT_PROVIDERS),
    }
    if provider == PROVIDER_PAYPAL:
        summary["settings"] = PayPalConfig.from_mapping(config).summary()
    elif provider == PROVIDER_STRIPE:
        summary["settings"] = StripeConfig.from_mapping(config).summary()
    return summary
