"""
OAuth2 client-credentials token provider for the PayPal REST API.
"""

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional

import requests

from ...config import PayPalConfig
from ...exceptions import AuthError, TransportError
from ...models import AccessCredential
from ...utils import redact_message
from ..base import TokenProvider

logger = logging.getLogger(__name__)


class PayPalTokenProvider(TokenProvider):
    """
    Caches a PayPal bearer token and refreshes it once it is about to expire.

    The cached credential stores ``expires_at = now + expires_in - 60`` so it is
    never handed out during the last minute of its life. The check-and-refresh
    sequence runs under a lock, so concurrent callers trigger a single refresh.
    """

    TOKEN_PATH = "/v1/oauth2/token"
    SAFETY_MARGIN_SECONDS = 60

    def __init__(
        self,
        config: PayPalConfig | Mapping[str, Any] | None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = PayPalConfig.coerce(config)
        self.config.require_credentials()
        self.session = session or requests.Session()
        self._clock = clock
        self._credential: Optional[AccessCredential] = None
        self._lock = threading.Lock()

    @property
    def token_url(self) -> str:
        return f"{self.config.base_url}{self.TOKEN_PATH}"

    @property
    def credential(self) -> Optional[AccessCredential]:
        return self._credential

    def get_access_token(self) -> str:
        """Return the cached token, fetching a new one if missing or stale."""
        with self._lock:
            now = self._clock()
            if self._credential is not None and self._credential.is_valid(now):
                return self._credential.token
            self._credential = self._request_token(now)
            return self._credential.token

    def invalidate(self) -> None:
        with self._lock:
            self._credential = None
        logger.debug("PayPal access token invalidated")

    def _request_token(self, now: float) -> AccessCredential:
        logger.debug("Requesting PayPal access token (%s)", self.config.environment)
        try:
            resp = self.session.post(
                self.token_url,
                headers={"Accept": "application/json", "Accept-Language": "en_US"},
                data={"grant_type": "client_credentials"},
                auth=(str(self.config.client_id), str(self.config.client_secret)),
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("PayPal token request timed out after %ss", self.config.timeout)
            raise TransportError("PayPal token request timed out", provider="paypal", url=self.token_url) from e
        except requests.exceptions.RequestException as e:
            logger.error("PayPal token request failed: %s", redact_message(str(e)))
            raise TransportError(f"PayPal token request failed: {e}", provider="paypal", url=self.token_url) from e

        if resp.status_code != 200:
            raise AuthError(
                f"Failed to get PayPal access token (HTTP {resp.status_code})",
                provider="paypal",
                status=resp.status_code,
            )

        try:
            token_data = resp.json()
        except ValueError as e:
            raise AuthError("Invalid token response from PayPal", provider="paypal", status=resp.status_code) from e

        if not isinstance(token_data, dict):
            raise AuthError("Invalid token response from PayPal", provider="paypal", status=resp.status_code)
        access_token = token_data.get("access_token")
        expires_in = token_data.get("expires_in")
        if not access_token or expires_in is None:
            raise AuthError("Invalid token response from PayPal", provider="paypal", status=resp.status_code)
        try:
            lifetime = float(expires_in)
        except (TypeError, ValueError) as e:
            raise AuthError("Invalid expires_in in PayPal token response", provider="paypal") from e

        logger.info("Obtained PayPal access token valid for %ss", int(lifetime))
        return AccessCredential(token=access_token, expires_at=now + lifetime - self.SAFETY_MARGIN_SECONDS)
