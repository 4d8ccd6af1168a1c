"""Application service: publish a tracking number to the Order service.

A successful publish is what marks the order as fulfilled in the system
of record; nothing is kept locally.
"""

from __future__ import annotations

import structlog

from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.model.order import ConfirmationStatus

logger = structlog.get_logger(__name__)


class TrackingNumberPublisher:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def publish(self, order_id: int, tracking_number: str) -> ConfirmationStatus:
        confirmation = self._order_gateway.update_tracking_number(
            order_id, tracking_number
        )
        logger.info(
            "Published tracking number",
            order_id=order_id,
            tracking_number=tracking_number,
            status=confirmation.message,
        )
        return confirmation
