"""Unit tests for the Order value object and its lifecycle."""

import dataclasses
from decimal import Decimal

import pytest

from apps.orders.domain import InvalidOrder, InvalidStateTransition, Order, OrderStatus


def test_create_builds_pending_order():
    order = Order.create("client-42", Decimal("100.00"))
    assert order.status == OrderStatus.PENDING
    assert order.client_id == "client-42"
    assert order.total == Decimal("100.00")
    assert str(order.total) == "100.00"
    assert order.created_at.tzinfo is not None


def test_create_generates_unique_ids():
    ids = {Order.create("c", Decimal("1")).id for _ in range(50)}
    assert len(ids) == 50


def test_confirm_returns_new_confirmed_order():
    """Confirm keeps identity and data and leaves the pending order untouched."""
    order = Order.create("client-42", Decimal("100.00"))
    confirmed = order.confirm()
    assert confirmed is not order
    assert confirmed.status == OrderStatus.CONFIRMED
    assert order.status == OrderStatus.PENDING
    assert (confirmed.id, confirmed.client_id, confirmed.total, confirmed.created_at) == (
        order.id, order.client_id, order.total, order.created_at,
    )


def test_confirm_twice_raises_invalid_transition():
    confirmed = Order.create("client-42", Decimal("100.00")).confirm()
    with pytest.raises(InvalidStateTransition) as e:
        confirmed.confirm()
    assert str(e.value) == "INVALID_STATE_TRANSITION"
    assert e.value.current == OrderStatus.CONFIRMED
    assert confirmed.status == OrderStatus.CONFIRMED


def test_order_is_frozen():
    order = Order.create("client-42", Decimal("1.00"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        order.status = OrderStatus.CONFIRMED


@pytest.mark.parametrize(
    "client_id,total",
    [
        ("", Decimal("1.00")),
        ("client", Decimal("-0.01")),
        ("client", 10.5),
        ("client", Decimal("NaN")),
    ],
)
def test_create_rejects_invalid_values(client_id, total):
    with pytest.raises(InvalidOrder):
        Order.create(client_id, total)


def test_zero_total_is_allowed():
    assert Order.create("client", Decimal("0")).total == Decimal("0")


@pytest.mark.parametrize("total", [Decimal("1.005"), Decimal("0.001"), Decimal("1E+17")])
def test_create_rejects_totals_the_column_cannot_hold(total):
    """Totals need at most 2 decimal places and 19 digits to be stored exactly."""
    with pytest.raises(InvalidOrder):
        Order.create("client", total)


@pytest.mark.parametrize("total", [Decimal("99999999999999999.99"), Decimal("1E+2"), Decimal("1.5")])
def test_create_accepts_totals_within_column_limits(total):
    assert Order.create("client", total).total == total
