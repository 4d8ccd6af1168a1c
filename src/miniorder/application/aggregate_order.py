"""Application service: fetch one order and prepare it for labelling.

Derives the Shipping-service products from the order's line items and
totals their prices.
"""

from __future__ import annotations

import structlog

from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.model.fulfillment import OrderInProcess
from miniorder.domain.model.order import LineItem
from miniorder.domain.model.shipping import ShippingProduct
from miniorder.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class OrderAggregator:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def fetch_order(self, order_id: int) -> OrderInProcess:
        """Fetch the full order and compute its products and total.

        Products keep the line items' order. A line item without a price
        adds nothing to the total.

        Raises OrderNotFound or RemoteUnavailable from the gateway.
        """
        order = self._order_gateway.get_order(order_id)

        products: list[ShippingProduct] = []
        total = Money.zero()
        for item in order.line_items:
            products.append(self._to_shipping_product(item))
            if item.unit_price is not None:
                total = total + item.unit_price

        logger.info(
            "Fetched order",
            order_id=order_id,
            line_items=len(order.line_items),
            total=str(total.amount),
        )
        return OrderInProcess(
            order=order,
            shipping_products=tuple(products),
            total_price=total,
        )

    @staticmethod
    def _to_shipping_product(item: LineItem) -> ShippingProduct:
        return ShippingProduct(
            name=item.product_name,
            description=item.product_description,
            price=item.unit_price,
        )
