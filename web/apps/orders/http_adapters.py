"""HTTP adapter client for the payments service.

This module implements the ``PaymentPort`` over HTTP using ``httpx``:

- Request correlation: propagates ``X-Request-ID`` from a ContextVar set by
    the gateway middleware.
- Fail-closed mapping: transport errors, timeouts, non-2xx responses and
    malformed bodies are all reported to the domain as a declined payment.
    The domain cannot distinguish them from a business decline.

There are no retries; every ``process`` call sends at most one request.
"""

import logging
from decimal import Decimal
from typing import Optional

import httpx
from django.conf import settings

from gateway.middleware import REQUEST_ID_CTX

from .domain import PaymentPort

logger = logging.getLogger("orders")


def _request_headers(extra: Optional[dict] = None) -> dict:
    """Build base headers including X-Request-ID and any extras.

    Reads the request id from the ContextVar populated by middleware and
    adds it as ``X-Request-ID`` when present.

    Args:
        extra: Optional dict of additional headers to include.

    Returns:
        dict: Final headers dictionary for the outgoing request.
    """
    headers: dict[str, str] = {}
    rid = REQUEST_ID_CTX.get()
    if rid and rid != "-":
        headers["X-Request-ID"] = rid
    if extra:
        headers.update(extra)
    return headers


class HttpPaymentClient(PaymentPort):
    """HTTP client for the payments service."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.PAYMENTS_BASE_URL
        self.timeout = timeout if timeout is not None else getattr(settings, "HTTP_TIMEOUT_SECS", 2.0)

    def process(self, order_id: str, amount: Decimal) -> bool:
        """Ask the payments service to approve a charge.

        Sends ``{"orderId", "amount"}`` to ``POST {base_url}/payments`` and
        reads ``{"approved": bool}`` back. The amount travels as a string so
        no precision is lost in JSON.

        Args:
            order_id: Identifier of the order being paid.
            amount: Amount to charge.

        Returns:
            bool: True only for a 2xx response whose body has
            ``approved: true``; False in every other case.
        """
        payload = {"orderId": order_id, "amount": str(amount)}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(f"{self.base_url}/payments", json=payload, headers=_request_headers())
                resp.raise_for_status()
                return resp.json().get("approved") is True
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(
                "payment call failed, treating as declined",
                extra={"order_id": order_id, "error": repr(e)},
            )
            return False
