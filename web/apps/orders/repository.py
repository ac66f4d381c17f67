"""Repository layer for persisting orders.

This module contains the Django ORM implementation of
``OrderRepositoryPort``. It maps between the domain ``Order`` and
``OrderModel`` so the domain layer is not coupled to Django ORM details,
and translates database failures into ``OrderStoreUnavailable``.
"""

import uuid

from django.db import DatabaseError

from .domain import Order, OrderNotFound, OrderRepositoryPort, OrderStatus, OrderStoreUnavailable
from .models import OrderModel


def _parse_id(order_id) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(order_id))
    except ValueError:
        return None


def _to_domain(obj: OrderModel) -> Order:
    return Order(
        id=obj.id,
        client_id=obj.client_id,
        total=obj.total,
        status=OrderStatus(obj.status),
        created_at=obj.created_at,
    )


class OrderRepository(OrderRepositoryPort):
    """Repository that persists Order domain objects using Django ORM."""

    def save(self, order: Order) -> Order:
        """Insert or update the row for ``order.id``.

        Args:
            order: Domain ``Order`` instance to persist.

        Returns:
            The order as read back from the ``orders`` row.

        Raises:
            OrderStoreUnavailable: If the database rejects the write.
        """
        try:
            obj, _ = OrderModel.objects.update_or_create(
                id=order.id,
                defaults={
                    "client_id": order.client_id,
                    "total": order.total,
                    "status": order.status.value,
                    "created_at": order.created_at,
                },
            )
            # read back the stored row so callers see the column's scale
            obj.refresh_from_db()
        except DatabaseError as e:
            raise OrderStoreUnavailable("save") from e
        return _to_domain(obj)

    def find_by_id(self, order_id: str) -> Order:
        """Load an order by id.

        A malformed identifier is treated as unknown.

        Raises:
            OrderNotFound: If there is no row for ``order_id``.
            OrderStoreUnavailable: If the query fails.
        """
        oid = _parse_id(order_id)
        if oid is None:
            raise OrderNotFound(order_id)
        try:
            obj = OrderModel.objects.get(id=oid)
        except OrderModel.DoesNotExist:
            raise OrderNotFound(order_id) from None
        except DatabaseError as e:
            raise OrderStoreUnavailable("find_by_id") from e
        return _to_domain(obj)

    def delete(self, order_id: str) -> None:
        oid = _parse_id(order_id)
        if oid is None:
            return
        try:
            OrderModel.objects.filter(id=oid).delete()
        except DatabaseError as e:
            raise OrderStoreUnavailable("delete") from e
