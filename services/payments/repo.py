"""SQLAlchemy repository for payment attempts.

This module records every payment decision taken by the mock payments
service: which order asked, for how much, and whether it was approved.

The database URL is read from the ``DATABASE_URL`` environment variable,
defaulting to a local sqlite file suitable for development.
"""

import os
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, String, Uuid, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Session, mapped_column

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./payments.db")
engine = create_engine(DATABASE_URL, pool_pre_ping=True)


class Base(DeclarativeBase):
    pass


class PaymentAttempt(Base):
    """SQLAlchemy model representing one payment decision.

    Attributes:
        id: Public UUID primary key.
        order_id: Identifier of the order the charge belongs to.
        amount: Requested amount, stored as fixed-point numeric.
        approved: Whether the charge was approved.
        created_at: When the decision was taken (UTC).
    """

    __tablename__ = "payment_attempts"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = mapped_column(String(64), nullable=False, index=True)
    amount = mapped_column(Numeric(19, 2, asdecimal=True), nullable=False)
    approved = mapped_column(Boolean, default=False, nullable=False)
    created_at = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


@contextmanager
def get_session():
    """Yield a SQLAlchemy session bound to the configured engine.

    The session is automatically closed on context exit.
    """
    with Session(engine) as s:
        yield s


class PaymentsRepo:
    """Repository for recording and reading payment attempts."""

    def record(self, order_id: str, amount: Decimal, approved: bool) -> uuid.UUID:
        """Persist a payment decision and return its UUID."""
        with get_session() as s:
            attempt = PaymentAttempt(order_id=order_id, amount=amount, approved=approved)
            s.add(attempt)
            s.commit()
            return attempt.id

    def attempts_for(self, order_id: str) -> list[PaymentAttempt]:
        with get_session() as s:
            rows = s.execute(
                select(PaymentAttempt).where(PaymentAttempt.order_id == order_id).order_by(PaymentAttempt.created_at)
            ).scalars().all()
            s.expunge_all()
            return list(rows)


Base.metadata.create_all(engine)
