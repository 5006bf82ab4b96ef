"""
Data models for the Unified Payments SDK.

Defines the access credential held by token providers and the records returned
from webhook handling. None of these are persisted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class AccessCredential:
    """Bearer token plus optional expiry instant (epoch seconds)."""

    token: str
    expires_at: Optional[float] = None

    def is_valid(self, now: float) -> bool:
        """A credential without expiry never goes stale."""
        if not self.token:
            return False
        return self.expires_at is None or now < self.expires_at

    def __repr__(self) -> str:
        return f"AccessCredential(token='***', expires_at={self.expires_at!r})"


class WebhookEventStatus(str, Enum):
    """Discriminator of a normalized webhook event."""

    COMPLETED = "completed"
    DENIED = "denied"
    REFUNDED = "refunded"
    CREATED = "created"
    CANCELLED = "cancelled"
    SUSPENDED = "suspended"
    UNHANDLED = "unhandled"


@dataclass
class WebhookResponse:
    """Status-coded answer for a webhook delivery endpoint."""

    status_code: int
    message: str
    data: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"statusCode": self.status_code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result
