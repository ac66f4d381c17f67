"""Unit tests for the OrderService domain orchestration.

These tests validate creating and confirming orders under different
conditions: happy path, unknown order, declined payment and double
confirmation. Stubbed ports are used to deterministically drive outcomes.
"""

import uuid
from decimal import Decimal

import pytest

from apps.orders.adapters import InMemoryOrderRepository, PaymentStub
from apps.orders.domain import (
    InvalidStateTransition,
    OrderNotFound,
    OrderService,
    OrderStatus,
    OrderStoreUnavailable,
)


class StubPaymentsOK:
    """Payments stub that approves every charge and records calls."""
    def __init__(self): self.calls = []
    def process(self, order_id, amount):
        self.calls.append((order_id, amount))
        return True


class StubPaymentsDeclined(StubPaymentsOK):
    """Payments stub that declines every charge."""
    def process(self, order_id, amount):
        super().process(order_id, amount)
        return False


class BrokenRepository(InMemoryOrderRepository):
    """Repository whose writes always fail."""
    def save(self, order):
        raise OrderStoreUnavailable("save")


@pytest.fixture
def repo():
    return InMemoryOrderRepository()


def test_create_persists_pending_order(repo):
    service = OrderService(repo, StubPaymentsOK())
    order = service.create("client-42", Decimal("100.00"))
    assert order.status == OrderStatus.PENDING
    assert order.total == Decimal("100.00")
    assert repo.find_by_id(str(order.id)) == order
    assert repo.writes == 1


def test_create_propagates_store_failure():
    service = OrderService(BrokenRepository(), StubPaymentsOK())
    with pytest.raises(OrderStoreUnavailable):
        service.create("client-42", Decimal("1.00"))


def test_confirm_ok(repo):
    """Happy path: payment approved, order confirmed and written once."""
    payments = StubPaymentsOK()
    service = OrderService(repo, payments)
    order = service.create("client-42", Decimal("100.00"))

    out = service.confirm(str(order.id))

    assert out.status == OrderStatus.CONFIRMED
    assert (out.id, out.client_id, out.total, out.created_at) == (
        order.id, order.client_id, order.total, order.created_at,
    )
    assert payments.calls == [(str(order.id), Decimal("100.00"))]
    assert repo.find_by_id(str(order.id)).status == OrderStatus.CONFIRMED
    assert repo.writes == 2


def test_confirm_unknown_order_raises_not_found(repo):
    payments = StubPaymentsOK()
    service = OrderService(repo, payments)
    with pytest.raises(OrderNotFound) as e:
        service.confirm(str(uuid.uuid4()))
    assert str(e.value) == "ORDER_NOT_FOUND"
    assert payments.calls == []
    assert repo.writes == 0


def test_confirm_payment_declined_leaves_order_pending(repo):
    """Payment error: PaymentDeclined is raised and nothing is written."""
    payments = StubPaymentsDeclined()
    service = OrderService(repo, payments)
    order = service.create("client-42", Decimal("100.00"))

    with pytest.raises(ValueError) as e:
        service.confirm(str(order.id))

    assert str(e.value) == "PAYMENT_DECLINED"
    assert len(payments.calls) == 1
    assert repo.find_by_id(str(order.id)).status == OrderStatus.PENDING
    assert repo.writes == 1


def test_confirm_twice_raises_invalid_transition(repo):
    """create -> confirm -> confirm again fails and keeps the stored state."""
    payments = StubPaymentsOK()
    service = OrderService(repo, payments)
    order = service.create("client-42", Decimal("100.00"))
    service.confirm(str(order.id))

    with pytest.raises(InvalidStateTransition):
        service.confirm(str(order.id))

    stored = repo.find_by_id(str(order.id))
    assert stored.status == OrderStatus.CONFIRMED
    assert stored.total == Decimal("100.00")
    assert len(payments.calls) == 2
    assert repo.writes == 2


def test_get_returns_stored_order(repo):
    service = OrderService(repo, PaymentStub())
    order = service.create("client-1", Decimal("5.50"))
    assert service.get(str(order.id)) == order


def test_payment_stub_approves():
    assert PaymentStub().process(str(uuid.uuid4()), Decimal("12.34")) is True


def test_in_memory_delete_is_idempotent(repo):
    service = OrderService(repo, PaymentStub())
    order = service.create("client-1", Decimal("1.00"))
    repo.delete(str(order.id))
    repo.delete(str(order.id))
    repo.delete("not-a-uuid")
    with pytest.raises(OrderNotFound):
        repo.find_by_id(str(order.id))
