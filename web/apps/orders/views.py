"""HTTP views for the orders app.

This module contains DRF API views used by the orders service. Views are
kept intentionally small: they validate requests (via Pydantic), delegate to
the domain service, and map the result or the domain error to an HTTP
response.

The views obtain a configured ``OrderService`` from
``providers.get_order_service()``, which wires the ORM repository with
either the HTTP payment client or the in-process ``PaymentStub`` depending
on runtime settings. This allows tests and local development to swap
implementations without changing view logic.
"""

import logging

from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from . import providers
from .domain import (
    InvalidOrder,
    InvalidStateTransition,
    OrderNotFound,
    OrderStoreUnavailable,
    PaymentDeclined,
)
from .parsers import DecimalJSONParser
from .schemas import CreateOrderDTO, OrderReadDTO

logger = logging.getLogger("orders")

ERROR_STATUS = {
    InvalidOrder: status.HTTP_400_BAD_REQUEST,
    OrderNotFound: status.HTTP_404_NOT_FOUND,
    PaymentDeclined: status.HTTP_402_PAYMENT_REQUIRED,
    InvalidStateTransition: status.HTTP_409_CONFLICT,
    OrderStoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}
DOMAIN_ERRORS = tuple(ERROR_STATUS)


def error_response(exc) -> Response:
    """Translate a domain error into ``{"detail": CODE}`` with its status."""
    code = ERROR_STATUS[type(exc)]
    if code >= 500:
        logger.error("order store unavailable", extra={"operation": exc.operation}, exc_info=exc)
    return Response({"detail": exc.code}, status=code)


class OrdersPingView(APIView):
    """Simple health-check endpoint for the orders module."""

    def get(self, request):
        """Return ``{"ok": True}`` with HTTP 200."""
        return Response({"ok": True})


class OrdersCollectionView(APIView):
    """Create an order.

    The payload is validated with a Pydantic DTO; the domain service builds
    a PENDING order and persists it.
    """

    parser_classes = [DecimalJSONParser]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_create"

    def post(self, request):
        """Create a new order.

        Args:
            request (Request): DRF request with ``{"clientId", "total"}``.

        Returns:
            Response: One of the following responses.
            - 201 with the order representation.
            - 400 with {detail: "VALIDATION_ERROR", errors: [...]} for
              invalid payloads.
            - 503 with {detail: "STORE_UNAVAILABLE"} when the order cannot
              be persisted.
        """
        try:
            dto = CreateOrderDTO.model_validate(request.data)
        except ValidationError as e:
            return Response(
                {"detail": "VALIDATION_ERROR", "errors": e.errors(include_url=False, include_context=False, include_input=False)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        service = providers.get_order_service()
        try:
            order = service.create(dto.client_id, dto.total)
        except DOMAIN_ERRORS as e:
            return error_response(e)

        return Response(OrderReadDTO.from_domain(order).to_json(), status=status.HTTP_201_CREATED)


class RetrieveOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_detail"

    def get(self, request, oid: str):
        try:
            order = providers.get_order_service().get(oid)
        except DOMAIN_ERRORS as e:
            return error_response(e)
        return Response(OrderReadDTO.from_domain(order).to_json(), status=status.HTTP_200_OK)


class ConfirmOrderView(APIView):
    """Confirm an order after the payment is approved.

    Status codes:
        - 200 with the confirmed order.
        - 404 ORDER_NOT_FOUND when the id is unknown.
        - 402 PAYMENT_DECLINED when the payment was not approved (including
          when the payments service could not be reached).
        - 409 INVALID_STATE_TRANSITION when the order is not PENDING.
        - 503 STORE_UNAVAILABLE when the store fails.
    """

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_confirm"

    def put(self, request, oid: str):
        try:
            order = providers.get_order_service().confirm(oid)
        except DOMAIN_ERRORS as e:
            return error_response(e)
        return Response(OrderReadDTO.from_domain(order).to_json(), status=status.HTTP_200_OK)
