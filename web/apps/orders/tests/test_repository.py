"""Integration tests for the Django ORM order repository."""

import uuid
from decimal import Decimal

import pytest
from django.db import DatabaseError, connection

from apps.orders.domain import Order, OrderNotFound, OrderStatus, OrderStoreUnavailable
from apps.orders.models import OrderModel
from apps.orders.repository import OrderRepository


@pytest.mark.django_db
def test_save_and_find_round_trip():
    repo = OrderRepository()
    order = Order.create("client-42", Decimal("0.10"))
    repo.save(order)

    loaded = repo.find_by_id(str(order.id))

    assert loaded.id == order.id
    assert loaded.client_id == "client-42"
    assert loaded.total == Decimal("0.10")
    assert str(loaded.total) == "0.10"
    assert loaded.status == OrderStatus.PENDING
    assert loaded.created_at == order.created_at


@pytest.mark.django_db
def test_save_is_an_upsert():
    repo = OrderRepository()
    order = Order.create("client-42", Decimal("100.00"))
    repo.save(order)
    repo.save(order.confirm())

    assert OrderModel.objects.count() == 1
    with connection.cursor() as cur:
        cur.execute("select status from orders where client_id = %s", ["client-42"])
        (status,) = cur.fetchone()
    assert status == "CONFIRMED"


@pytest.mark.django_db
@pytest.mark.parametrize("oid", [lambda: str(uuid.uuid4()), lambda: "not-a-uuid"])
def test_find_missing_raises_not_found(oid):
    with pytest.raises(OrderNotFound):
        OrderRepository().find_by_id(oid())


@pytest.mark.django_db
def test_delete_twice_is_not_an_error():
    repo = OrderRepository()
    order = repo.save(Order.create("client-1", Decimal("1.00")))
    repo.delete(str(order.id))
    repo.delete(str(order.id))
    repo.delete("not-a-uuid")
    assert not OrderModel.objects.filter(id=order.id).exists()


@pytest.mark.django_db
def test_database_errors_become_store_unavailable(monkeypatch):
    def boom(*args, **kwargs):
        raise DatabaseError("connection lost")

    monkeypatch.setattr(OrderModel.objects, "get", boom)
    monkeypatch.setattr(OrderModel.objects, "update_or_create", boom)

    repo = OrderRepository()
    with pytest.raises(OrderStoreUnavailable) as e:
        repo.find_by_id(str(uuid.uuid4()))
    assert isinstance(e.value.__cause__, DatabaseError)
    with pytest.raises(OrderStoreUnavailable):
        repo.save(Order.create("client-1", Decimal("1.00")))


@pytest.mark.django_db
def test_sub_cent_total_is_rejected_before_reaching_the_store():
    """A total the decimal(19,2) column would round is never written."""
    from apps.orders.adapters import PaymentStub
    from apps.orders.domain import InvalidOrder, OrderService

    with pytest.raises(InvalidOrder):
        OrderService(OrderRepository(), PaymentStub()).create("c", Decimal("1.005"))
    assert OrderModel.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize("total,stored", [("1.5", "1.50"), ("100", "100.00"), ("1E+2", "100.00")])
def test_save_returns_the_stored_row(total, stored):
    saved = OrderRepository().save(Order.create("client-42", Decimal(total)))
    assert str(saved.total) == stored
    assert saved == OrderRepository().find_by_id(str(saved.id))
