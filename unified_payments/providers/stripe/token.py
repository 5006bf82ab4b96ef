"""
API-key credential supply for Stripe.
"""

import logging
from typing import Any, Mapping

from ...config import StripeConfig
from ...exceptions import ConfigurationError
from ..base import TokenProvider

logger = logging.getLogger(__name__)


class StripeTokenProvider(TokenProvider):
    """Stripe authenticates with a static secret key, so nothing is fetched or cached."""

    def __init__(self, config: StripeConfig | Mapping[str, Any] | None):
        self.config = StripeConfig.coerce(config)
        key_name = "sandbox_api_key" if self.config.sandbox else "api_key"
        key = getattr(self.config, key_name)
        if not key or not isinstance(key, str):
            raise ConfigurationError(f"Stripe {key_name} is required", config_key=key_name)

    def get_access_token(self) -> str:
        return self.config.sandbox_api_key if self.config.sandbox else self.config.api_key
