"""HTTP client for the Shipping service."""

from __future__ import annotations

from miniorder.domain.exceptions import LabelGenerationFailed
from miniorder.domain.gateway.shipping_gateway import ShippingGateway
from miniorder.domain.model.shipping import (
    LabelRequest,
    LabelResult,
    ShippingAddress,
    ShippingProduct,
)
from miniorder.infrastructure.remote.base_client import JsonServiceClient


class HttpShippingServiceClient(JsonServiceClient, ShippingGateway):
    """Client for the Shipping service's label endpoint."""

    service_name = "Shipping service"

    # --- ShippingGateway interface --------------------------------------------

    def get_label(self, request: LabelRequest) -> LabelResult:
        resp = self._request("POST", "labels", json=self._to_raw(request))
        if not resp.ok:
            raise LabelGenerationFailed(
                f"{self.service_name} could not generate a label: "
                f"HTTP {resp.status_code} {resp.text.strip()}"
            )

        try:
            body = self._decode(resp)
            tracking_number = body["trackingNumber"]
            html = body["html"]
        except (KeyError, TypeError, ValueError) as exc:
            raise LabelGenerationFailed(
                f"Malformed label response from {self.service_name}: {exc}"
            ) from exc

        if not isinstance(tracking_number, str) or not tracking_number.strip():
            raise LabelGenerationFailed(
                f"{self.service_name} returned a label without a tracking number"
            )
        return LabelResult(tracking_number=tracking_number, html=html or "")

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_raw(cls, request: LabelRequest) -> dict:
        customer = request.customer
        return {
            "customer": {
                "firstName": customer.first_name,
                "lastName": customer.last_name,
                "email": customer.email,
                "billingAddress": cls._address_to_raw(customer.billing_address),
                "shippingAddress": cls._address_to_raw(customer.shipping_address),
            },
            "products": [cls._product_to_raw(p) for p in request.products],
        }

    @staticmethod
    def _address_to_raw(address: ShippingAddress) -> dict:
        return {
            "street1": address.street1,
            "street2": address.street2,
            "city": address.city,
            "state": address.state,
            "zip": address.zip,
        }

    @staticmethod
    def _product_to_raw(product: ShippingProduct) -> dict:
        return {
            "name": product.name,
            "description": product.description,
            # sent as a string so no float ever touches the amount
            "price": str(product.price.amount) if product.price is not None else None,
        }
