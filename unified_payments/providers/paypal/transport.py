"""
Authenticated JSON transport for the PayPal REST API.
"""

import logging
from typing import Any, Mapping, Optional

import requests

from ...config import PayPalConfig
from ...exceptions import ApiError, TransportError
from ...utils import redact_message
from ..base import TokenProvider

logger = logging.getLogger(__name__)


class PayPalTransport:
    """
    Issues one synchronous request per call with the current bearer token.

    Connection failures and timeouts surface as :class:`TransportError`, HTTP
    status >= 400 as :class:`ApiError`; anything else returns the decoded body.
    A 401 drops the cached token so the next call re-authenticates.
    """

    def __init__(
        self,
        config: PayPalConfig,
        token_provider: TokenProvider,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.token_provider = token_provider
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token_provider.get_access_token()}",
        }

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Send a request to ``path`` under the configured base URL.

        Args:
            method: HTTP method (GET, POST, PATCH, ...)
            path: API path starting with ``/``
            json: Request body, JSON-encoded when not None
            params: Optional query parameters

        Returns:
            The decoded JSON body, or ``{}`` for an empty 2xx response

        Raises:
            TransportError: On connection-level failure or timeout
            ApiError: If the API answers with status >= 400
        """
        url = self.url_for(path)
        headers = self._headers()
        logger.debug("PayPal %s %s", method.upper(), path)
        try:
            resp = self.session.request(
                method.upper(),
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("PayPal API request timed out: %s %s", method.upper(), path)
            raise TransportError("PayPal API request timed out", provider="paypal", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error("PayPal API request failed: %s %s: %s", method.upper(), path, redact_message(str(e)))
            raise TransportError(f"PayPal API request failed: {e}", provider="paypal", url=url) from e

        body = self._decode(resp)
        if resp.status_code >= 400:
            if resp.status_code == 401:
                self.token_provider.invalidate()
            logger.warning("PayPal API error %s for %s %s", resp.status_code, method.upper(), path)
            raise ApiError(
                f"PayPal API error (HTTP {resp.status_code})",
                provider="paypal",
                status=resp.status_code,
                body=body,
            )
        if isinstance(body, str):
            raise ApiError(
                "PayPal API returned a non-JSON response",
                provider="paypal",
                status=resp.status_code,
                body=body,
            )
        return body

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)
