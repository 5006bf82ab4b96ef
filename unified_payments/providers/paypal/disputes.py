"""
PayPal customer dispute operations.
"""

import logging
from typing import Any, Mapping, Optional

from ...exceptions import ValidationError
from ...utils import compact, require_identifier
from .transport import PayPalTransport

logger = logging.getLogger(__name__)

DISPUTES_PATH = "/v1/customer/disputes"


class PayPalDisputeProvider:
    def __init__(self, transport: PayPalTransport):
        self.transport = transport

    def list_disputes(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """List disputes; ``params`` are passed as query filters (e.g. ``dispute_state``)."""
        return self.transport.get(DISPUTES_PATH, params=compact(params) if params else None)

    def get_dispute(self, dispute_id: str) -> Any:
        require_identifier(dispute_id, "dispute_id")
        return self.transport.get(f"{DISPUTES_PATH}/{dispute_id}")

    def accept_claim(self, dispute_id: str, claim_data: Optional[Mapping[str, Any]] = None) -> Any:
        """Accept liability for a dispute, refunding the buyer."""
        require_identifier(dispute_id, "dispute_id")
        result = self.transport.post(f"{DISPUTES_PATH}/{dispute_id}/accept-claim", json=dict(claim_data or {}))
        logger.info("PayPal dispute claim accepted: %s", dispute_id)
        return result

    def provide_supporting_info(self, dispute_id: str, evidence: Mapping[str, Any]) -> Any:
        """Submit evidence for a dispute under review."""
        require_identifier(dispute_id, "dispute_id")
        if not isinstance(evidence, Mapping) or not evidence:
            raise ValidationError("evidence must be a non-empty mapping", field="evidence")
        result = self.transport.post(f"{DISPUTES_PATH}/{dispute_id}/provide-supporting-info", json=dict(evidence))
        logger.info("PayPal dispute supporting info submitted: %s", dispute_id)
        return result
