"""Application service: list pending orders (query)."""

from __future__ import annotations

import structlog

from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.model.order import OrderSummary

logger = structlog.get_logger(__name__)


class PendingOrderLister:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def list_pending(self) -> list[OrderSummary]:
        """Return the Order service's pending orders as listed, unfiltered.

        A RemoteUnavailable here is fatal to the run: no partial listing
        is usable.
        """
        summaries = list(self._order_gateway.list_pending_orders())
        logger.info("Fetched pending orders", count=len(summaries))
        return summaries
