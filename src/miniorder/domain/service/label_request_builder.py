"""Domain service: Label Request Builder.

Translates an Order-service order into the Shipping service's request
shape. The two services own separate schemas that happen to line up
today; this is the only module that knows about both, so a change on
either side is absorbed here.

Pure mapping: no gateway calls, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from miniorder.domain.model.order import Address, Customer, Order
from miniorder.domain.model.shipping import (
    LabelRequest,
    ShippingAddress,
    ShippingCustomer,
    ShippingProduct,
)


class LabelRequestBuilder:

    def build_request(
        self,
        order: Order,
        shipping_products: Iterable[ShippingProduct],
    ) -> LabelRequest:
        return LabelRequest(
            customer=self._to_shipping_customer(order.customer),
            products=tuple(shipping_products),
        )

    # --- Mapping --------------------------------------------------------------

    @classmethod
    def _to_shipping_customer(cls, customer: Customer) -> ShippingCustomer:
        return ShippingCustomer(
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            billing_address=cls._to_shipping_address(customer.billing_address),
            shipping_address=cls._to_shipping_address(customer.shipping_address),
        )

    @staticmethod
    def _to_shipping_address(address: Address) -> ShippingAddress:
        return ShippingAddress(
            street1=address.street1,
            street2=address.street2,
            city=address.city,
            state=address.state,
            zip=address.zip,
        )
