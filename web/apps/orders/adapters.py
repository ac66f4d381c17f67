"""In-process stub adapters for the orders domain ports.

These stubs implement ``PaymentPort`` and ``OrderRepositoryPort`` without
any network or database access. They are intended for unit tests and local
development where deterministic behavior is useful and external services
are not required.
"""

import logging
import uuid
from decimal import Decimal

from .domain import Order, OrderNotFound, OrderRepositoryPort, PaymentPort

logger = logging.getLogger("orders")


class PaymentStub(PaymentPort):
    """Stub implementation of ``PaymentPort`` that approves every charge."""

    def process(self, order_id: str, amount: Decimal) -> bool:
        """Log the mock charge and approve it.

        Args:
            order_id: Identifier of the order being paid.
            amount: Amount to charge.

        Returns:
            bool: Always True.
        """
        logger.info("[MOCK] processing payment", extra={"order_id": order_id, "amount": str(amount)})
        return True


class InMemoryOrderRepository(OrderRepositoryPort):
    """Dict-backed implementation of ``OrderRepositoryPort``.

    Orders are keyed by their UUID. ``writes`` counts calls to ``save`` so
    tests can assert how many times the domain wrote to the store.
    """

    def __init__(self):
        self._orders: dict[uuid.UUID, Order] = {}
        self.writes = 0

    def save(self, order: Order) -> Order:
        self._orders[order.id] = order
        self.writes += 1
        return order

    def find_by_id(self, order_id: str) -> Order:
        try:
            return self._orders[uuid.UUID(str(order_id))]
        except (KeyError, ValueError):
            raise OrderNotFound(order_id) from None

    def delete(self, order_id: str) -> None:
        try:
            self._orders.pop(uuid.UUID(str(order_id)), None)
        except ValueError:
            return
