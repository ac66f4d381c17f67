"""Service provider helpers for wiring OrderService with ports.

This module exposes a small factory function ``get_order_service`` that
returns a configured ``OrderService`` instance backed by the Django ORM
repository. The payment port is the HTTP client when
``settings.USE_HTTP_ADAPTERS`` is truthy, and the in-process
``PaymentStub`` otherwise (tests and local development).
"""

from django.conf import settings

from .adapters import PaymentStub
from .domain import OrderService
from .http_adapters import HttpPaymentClient
from .repository import OrderRepository


def get_order_service() -> OrderService:
    """Return a configured OrderService instance.

    Returns:
        OrderService: A service instance with appropriate ports.
    """
    if getattr(settings, "USE_HTTP_ADAPTERS", True):
        payments = HttpPaymentClient()
    else:
        payments = PaymentStub()
    return OrderService(repository=OrderRepository(), payments=payments)
