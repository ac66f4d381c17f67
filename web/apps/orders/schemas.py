"""Pydantic schemas for orders.

This module exposes the request validation schema and the read
representation used by the orders API.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain import Order, OrderStatus


class CreateOrderDTO(BaseModel):
    """Schema for creating an order.

    Attributes:
        client_id: Client identifier (``clientId`` in JSON), 1-128 chars.
        total: Non-negative amount with at most 2 decimal places.
    """

    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(alias="clientId", min_length=1, max_length=128)
    total: Decimal = Field(ge=0, max_digits=19, decimal_places=2)

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        """Reject identifiers made only of whitespace.

        Raises:
            ValueError: When the identifier is blank.
        """
        if not v.strip():
            raise ValueError("clientId must not be blank")
        return v

    @field_validator("total", mode="before")
    @classmethod
    def reject_float(cls, v):
        # JSON numbers arrive as Decimal from DecimalJSONParser
        if isinstance(v, float):
            raise ValueError("total must be a decimal, not a float")
        return v


class OrderReadDTO(BaseModel):
    """Read representation of an order returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    client_id: str = Field(serialization_alias="clientId")
    total: Decimal
    status: OrderStatus
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderReadDTO":
        return cls(
            id=order.id,
            client_id=order.client_id,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
