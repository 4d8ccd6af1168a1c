"""Shared plumbing for the JSON-over-HTTP service clients."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import requests
import structlog

from miniorder.domain.exceptions import RemoteUnavailable

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class JsonServiceClient:
    """Base class holding the HTTP session and transport error handling.

    Subclasses decide what a given HTTP status means for their service;
    this class only turns "could not talk to the service at all" into
    RemoteUnavailable.
    """

    service_name = "remote service"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise ValueError(f"A base URL is required for the {self.service_name}.")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def _request(
        self,
        method: str,
        endpoint: str,
        json: dict | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        logger.debug("HTTP request", service=self.service_name, method=method, url=url)
        try:
            return self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteUnavailable(
                f"{self.service_name} unreachable ({method} {url}): {exc}"
            ) from exc

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        """Decode a JSON body, keeping every number with a fraction exact."""
        return resp.json(parse_float=Decimal)
