"""HTTP client for the Order service."""

from __future__ import annotations

from datetime import datetime

import requests

from miniorder.domain.exceptions import (
    OrderNotFound,
    RemoteUnavailable,
    UpdateRejected,
    ValidationError,
)
from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.model.order import (
    Address,
    ConfirmationStatus,
    Customer,
    LineItem,
    Order,
    OrderSummary,
)
from miniorder.domain.model.value_objects import Money
from miniorder.infrastructure.remote.base_client import JsonServiceClient

# Payload problems that mean the service sent something we cannot read.
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError, ValidationError)


def _parse_date(raw: str) -> datetime:
    # fromisoformat only understands a "Z" suffix from Python 3.11 on
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


class HttpOrderServiceClient(JsonServiceClient, OrderGateway):
    """Client for the Order service's REST API."""

    service_name = "Order service"

    # --- OrderGateway interface -----------------------------------------------

    def list_pending_orders(self) -> list[OrderSummary]:
        resp = self._request("GET", "orders/pending")
        self._raise_for_unavailable(resp)
        try:
            return [self._to_summary(raw) for raw in self._decode(resp)]
        except _MALFORMED as exc:
            raise RemoteUnavailable(
                f"Malformed pending order list from {self.service_name}: {exc}"
            ) from exc

    def get_order(self, order_id: int) -> Order:
        resp = self._request("GET", f"orders/{order_id}")
        if resp.status_code == 404:
            raise OrderNotFound(f"Order #{order_id} not found")
        self._raise_for_unavailable(resp)
        try:
            return self._to_order(self._decode(resp))
        except _MALFORMED as exc:
            raise RemoteUnavailable(
                f"Malformed order #{order_id} from {self.service_name}: {exc}"
            ) from exc

    def update_tracking_number(
        self, order_id: int, tracking_number: str
    ) -> ConfirmationStatus:
        resp = self._request(
            "PUT",
            f"orders/{order_id}/tracking-number",
            json={"trackingNumber": tracking_number},
        )
        if 400 <= resp.status_code < 500:
            raise UpdateRejected(
                f"Tracking number {tracking_number} rejected for order "
                f"#{order_id}: HTTP {resp.status_code} {resp.text.strip()}"
            )
        self._raise_for_unavailable(resp)

        message = "OK"
        if resp.content:
            try:
                body = self._decode(resp)
            except ValueError as exc:
                raise RemoteUnavailable(
                    f"Malformed update response from {self.service_name}: {exc}"
                ) from exc
            if isinstance(body, dict):
                if body.get("accepted") is False:
                    raise UpdateRejected(
                        f"Tracking number {tracking_number} rejected for order "
                        f"#{order_id}: {body.get('status', 'no reason given')}"
                    )
                message = str(body.get("status", message))
        return ConfirmationStatus(
            order_id=order_id,
            tracking_number=tracking_number,
            message=message,
        )

    # --- Helpers --------------------------------------------------------------

    def _raise_for_unavailable(self, resp: requests.Response) -> None:
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise RemoteUnavailable(
                f"{self.service_name} answered HTTP {resp.status_code} "
                f"for {resp.request.method} {resp.url}"
            ) from exc

    # --- Deserialization ------------------------------------------------------

    @staticmethod
    def _to_summary(raw: dict) -> OrderSummary:
        return OrderSummary(
            order_id=int(raw["orderId"]),
            customer_name=raw["customerName"],
            order_date=_parse_date(raw["orderDate"]),
        )

    @classmethod
    def _to_order(cls, raw: dict) -> Order:
        customer = raw["customer"]
        return Order(
            order_id=int(raw["orderId"]),
            customer=Customer(
                first_name=customer.get("firstName", ""),
                last_name=customer.get("lastName", ""),
                email=customer.get("email", ""),
                billing_address=cls._to_address(customer.get("billingAddress")),
                shipping_address=cls._to_address(customer.get("shippingAddress")),
            ),
            line_items=tuple(
                cls._to_line_item(detail) for detail in raw.get("orderDetails") or []
            ),
        )

    @staticmethod
    def _to_address(raw: dict | None) -> Address:
        raw = raw or {}
        return Address(
            street1=raw.get("street1") or "",
            street2=raw.get("street2") or "",
            city=raw.get("city") or "",
            state=raw.get("state") or "",
            zip=raw.get("zip") or "",
        )

    @staticmethod
    def _to_line_item(raw: dict) -> LineItem:
        product = raw["product"]
        price = product.get("price")
        return LineItem(
            product_name=product.get("name", ""),
            product_description=product.get("description") or "",
            unit_price=Money.of(price) if price is not None else None,
        )
