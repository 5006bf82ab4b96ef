"""
Custom exceptions for the Unified Payments SDK.

Defines the error taxonomy shared by every provider: configuration, validation,
transport, authentication, signature and remote API errors.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class UnifiedPaymentsError(Exception):
    """Base exception for all Unified Payments SDK errors."""

    message: str
    error_code: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        logger.error(
            "%s: %s (Code: %s, Details: %s)",
            self.__class__.__name__,
            self.message,
            self.error_code,
            self.details,
        )

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}" if self.error_code else self.message

    def _merge_details(self, values: dict[str, Any]) -> None:
        self.details.update({k: v for k, v in values.items() if v is not None})


@dataclass
class ConfigurationError(UnifiedPaymentsError):
    """Raised when required credentials or settings are missing or invalid."""

    config_key: Optional[str] = None
    expected_value: Optional[str] = None
    actual_value: Optional[str] = None

    def __post_init__(self):
        self._merge_details(
            {
                "config_key": self.config_key,
                "expected_value": self.expected_value,
                "actual_value": self.actual_value,
            }
        )
        self.error_code = self.error_code or "CONFIGURATION_ERROR"
        super().__post_init__()


@dataclass
class ValidationError(UnifiedPaymentsError):
    """Raised when caller-supplied fields are missing or invalid."""

    field: Optional[str] = None
    value: Any = None
    constraints: Optional[dict[str, Any]] = None

    def __post_init__(self):
        self._merge_details(
            {
                "field": self.field,
                "value": self.value,
                "constraints": self.constraints,
            }
        )
        self.error_code = self.error_code or "VALIDATION_ERROR"
        super().__post_init__()


@dataclass
class ProviderError(UnifiedPaymentsError):
    """Base exception for errors raised while talking to a payment provider."""

    provider: Optional[str] = None

    def __post_init__(self):
        self._merge_details({"provider": self.provider})
        self.error_code = self.error_code or "PROVIDER_ERROR"
        super().__post_init__()


@dataclass
class TransportError(ProviderError):
    """Raised on connection-level failures (DNS, refused connection, timeout)."""

    url: Optional[str] = None

    def __post_init__(self):
        self._merge_details({"url": self.url})
        self.error_code = self.error_code or "TRANSPORT_ERROR"
        super().__post_init__()


@dataclass
class AuthError(ProviderError):
    """Raised when the provider refuses to issue an access token."""

    status: Optional[int] = None

    def __post_init__(self):
        self._merge_details({"status": self.status})
        self.error_code = self.error_code or "AUTH_ERROR"
        super().__post_init__()


@dataclass
class SignatureError(ProviderError):
    """Raised when a webhook notification fails authenticity verification."""

    verification_status: Optional[str] = None

    def __post_init__(self):
        self._merge_details({"verification_status": self.verification_status})
        self.error_code = self.error_code or "SIGNATURE_ERROR"
        super().__post_init__()


@dataclass
class ApiError(ProviderError):
    """Raised when the remote API answers with status >= 400 or the SDK reports an error."""

    status: Optional[int] = None
    body: Any = None

    def __post_init__(self):
        self._merge_details({"status": self.status, "body": self.body})
        self.error_code = self.error_code or "API_ERROR"
        super().__post_init__()


@dataclass
class UnsupportedProviderError(UnifiedPaymentsError):
    """Raised when the factory is asked for a provider it does not know."""

    provider: Optional[str] = None
    supported_providers: Optional[list] = None

    def __post_init__(self):
        self._merge_details(
            {
                "provider": self.provider,
                "supported_providers": self.supported_providers,
            }
        )
        self.error_code = self.error_code or "UNSUPPORTED_PROVIDER"
        super().__post_init__()


@dataclass
class MalformedPayloadError(UnifiedPaymentsError):
    """Raised when a webhook body is not a valid JSON event envelope."""

    provider: Optional[str] = None

    def __post_init__(self):
        self._merge_details({"provider": self.provider})
        self.error_code = self.error_code or "MALFORMED_PAYLOAD"
        super().__post_init__()
