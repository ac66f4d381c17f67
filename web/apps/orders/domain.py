"""Domain model, ports and service for orders.

This module contains the ``Order`` value object and its lifecycle, the
protocol definitions (ports) for the collaborators the domain depends on
(order store and payments), the use-case ports exposed to the delivery
layer, and the domain service that orchestrates creating and confirming
orders. Nothing here knows about Django, HTTP or SQL.
"""

import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Protocol

logger = logging.getLogger("orders")

# Limits of the decimal(19,2) column orders are stored in
TOTAL_MAX_DIGITS = 19
TOTAL_DECIMAL_PLACES = 2


# ---- Enums ----
class OrderStatus(str, Enum):
    """Enumeration of the possible order statuses.

    ``PENDING`` is the initial state and ``CONFIRMED`` is terminal. The only
    allowed transition is PENDING -> CONFIRMED.
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"


# ---- Errors ----
class OrderError(ValueError):
    """Base class for business errors raised by the orders domain.

    ``str(exc)`` is a short error code that the HTTP layer returns as
    ``detail``.
    """

    code = "ORDER_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(self.code)
        self.message = message or self.code


class InvalidOrder(OrderError):
    code = "INVALID_ORDER"


class OrderNotFound(OrderError):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id):
        super().__init__(f"Order not found with id: {order_id}")
        self.order_id = order_id


class InvalidStateTransition(OrderError):
    code = "INVALID_STATE_TRANSITION"

    def __init__(self, current: OrderStatus, target: OrderStatus):
        super().__init__(f"Order cannot move from {current.value} to {target.value}")
        self.current = current
        self.target = target


class PaymentDeclined(OrderError):
    code = "PAYMENT_DECLINED"

    def __init__(self, order_id):
        super().__init__(f"Payment was declined for order: {order_id}")
        self.order_id = order_id


class OrderStoreUnavailable(RuntimeError):
    """The order store could not complete an operation."""

    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str):
        super().__init__(self.code)
        self.operation = operation


# ---- Entities ----
@dataclass(frozen=True)
class Order:
    """An order and its lifecycle state.

    Attributes:
        id: UUID assigned on creation; never reused or changed.
        client_id: Opaque identifier of the client placing the order.
        total: Order total as a ``Decimal`` to avoid floating point drift,
            with at most 2 decimal places and 19 digits.
        status: Current ``OrderStatus``.
        created_at: Timezone-aware creation timestamp, set once.

    The dataclass is frozen: ``confirm`` returns a new instance instead of
    mutating this one.
    """

    id: uuid.UUID
    client_id: str
    total: Decimal
    status: OrderStatus
    created_at: datetime

    def __post_init__(self):
        if not isinstance(self.client_id, str) or not self.client_id:
            raise InvalidOrder("client_id must be a non-empty string")
        if not isinstance(self.total, Decimal):
            raise InvalidOrder("total must be a Decimal")
        if not self.total.is_finite() or self.total < 0:
            raise InvalidOrder("total must be a non-negative amount")
        if self.total.as_tuple().exponent < -TOTAL_DECIMAL_PLACES:
            raise InvalidOrder(f"total must have at most {TOTAL_DECIMAL_PLACES} decimal places")
        if self.total.adjusted() >= TOTAL_MAX_DIGITS - TOTAL_DECIMAL_PLACES:
            raise InvalidOrder(f"total must have at most {TOTAL_MAX_DIGITS} digits")

    @classmethod
    def create(cls, client_id: str, total: Decimal) -> "Order":
        """Build a new pending order with a fresh id and timestamp."""
        return cls(
            id=uuid.uuid4(),
            client_id=client_id,
            total=total,
            status=OrderStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )

    def confirm(self) -> "Order":
        """Return a confirmed copy of this order.

        Raises:
            InvalidStateTransition: If the order is not PENDING.
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidStateTransition(self.status, OrderStatus.CONFIRMED)
        return dataclasses.replace(self, status=OrderStatus.CONFIRMED)


# ---- Ports (DIP) ----
class OrderRepositoryPort(Protocol):
    """Port describing the order store used by the domain."""

    def save(self, order: Order) -> Order:
        """Insert or update ``order`` by id and return the stored version.

        Raises:
            OrderStoreUnavailable: If the underlying storage fails.
        """
        raise NotImplementedError()

    def find_by_id(self, order_id: str) -> Order:
        """Load an order by its identifier.

        Raises:
            OrderNotFound: If no order has this identifier.
            OrderStoreUnavailable: If the underlying storage fails.
        """
        raise NotImplementedError()

    def delete(self, order_id: str) -> None:
        """Remove the order if present. Deleting a missing order is a no-op."""
        raise NotImplementedError()


class PaymentPort(Protocol):
    """Port describing the payment check used by the domain.

    Implementers must map any communication failure to ``False``: callers
    cannot tell a declined charge from an unreachable payment provider.
    """

    def process(self, order_id: str, amount: Decimal) -> bool:
        """Ask for approval of a charge.

        Args:
            order_id: Identifier of the order being paid.
            amount: Amount to charge.

        Returns:
            True if the charge was approved, False otherwise.
        """
        raise NotImplementedError()


class CreateOrderPort(Protocol):
    def create(self, client_id: str, total: Decimal) -> Order: ...


class ConfirmOrderPort(Protocol):
    def confirm(self, order_id: str) -> Order: ...


class GetOrderPort(Protocol):
    def get(self, order_id: str) -> Order: ...


# ---- Domain service ----
class OrderService:
    """Domain service implementing the order use cases.

    The service composes the order store and payment ports. It does not
    handle persistence or transport details itself, and it performs no
    locking: two concurrent confirms of the same order may both reach the
    payment port.
    """

    def __init__(self, repository: OrderRepositoryPort, payments: PaymentPort):
        """Initialize the service with required dependencies.

        Args:
            repository: OrderRepositoryPort used to load and store orders.
            payments: PaymentPort used to approve charges.
        """
        self.repository = repository
        self.payments = payments

    def create(self, client_id: str, total: Decimal) -> Order:
        """Create a pending order and persist it.

        Returns:
            The persisted order.

        Raises:
            InvalidOrder: If ``client_id`` or ``total`` are not acceptable.
            OrderStoreUnavailable: If the order cannot be stored.
        """
        order = Order.create(client_id, total)
        saved = self.repository.save(order)
        logger.info("order created", extra={"order_id": str(saved.id), "client_id": saved.client_id})
        return saved

    def get(self, order_id: str) -> Order:
        return self.repository.find_by_id(order_id)

    def confirm(self, order_id: str) -> Order:
        """Confirm an order once its payment is approved.

        The payment port is called exactly once. The order is written back
        only when the payment is approved and the transition is valid.

        Raises:
            OrderNotFound: If the order does not exist.
            PaymentDeclined: If the payment port did not approve the charge.
            InvalidStateTransition: If the order is not PENDING.
            OrderStoreUnavailable: If the store fails.
        """
        order = self.repository.find_by_id(order_id)

        # 1) Payment check
        if not self.payments.process(str(order.id), order.total):
            logger.info("payment declined", extra={"order_id": str(order.id)})
            raise PaymentDeclined(order.id)

        # 2) Transition and persist
        confirmed = order.confirm()
        saved = self.repository.save(confirmed)
        logger.info("order confirmed", extra={"order_id": str(saved.id)})
        return saved
