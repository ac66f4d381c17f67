"""Mock payments service API built with FastAPI.

This module exposes endpoints to check service health and to approve a
payment for an order. Validation is performed with Pydantic models, while
every decision is recorded through the SQLAlchemy-backed repository in
``repo.PaymentsRepo``.

Approval rule: a charge is approved when its amount is positive and does
not exceed ``PAYMENTS_MAX_APPROVED_AMOUNT``.
"""

import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from pythonjsonlogger.json import JsonFormatter
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from repo import PaymentsRepo, engine

MAX_APPROVED_AMOUNT = Decimal(os.getenv("PAYMENTS_MAX_APPROVED_AMOUNT", "10000.00"))
DB_STARTUP_TIMEOUT_SECS = float(os.getenv("DB_STARTUP_TIMEOUT_SECS", "30"))

logger = logging.getLogger("payments")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"))
    logger.addHandler(h)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))


def wait_for_db() -> None:
    """Block until the DB accepts connections or the startup timeout expires."""
    deadline = time.time() + DB_STARTUP_TIMEOUT_SECS
    while True:
        try:
            with engine.connect() as conn:
                conn.execute(text("select 1"))
            return
        except OperationalError:
            if time.time() > deadline:
                raise
            time.sleep(1)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await run_in_threadpool(wait_for_db)
    yield


app = FastAPI(title="Payments Service", lifespan=lifespan)


class PaymentRequest(BaseModel):
    """Request body for the payments endpoint.

    Attributes:
        orderId: Identifier of the order being paid.
        amount: Non-negative amount with at most 2 decimal places.
    """

    orderId: str = Field(min_length=1, max_length=64)
    amount: Decimal = Field(ge=0, max_digits=19, decimal_places=2)


class PaymentResponse(BaseModel):
    approved: bool


def is_approved(amount: Decimal) -> bool:
    return Decimal("0") < amount <= MAX_APPROVED_AMOUNT


@app.get("/health")
def health():
    """Liveness/health probe endpoint."""
    return {"ok": True}


@app.post("/payments", response_model=PaymentResponse)
def process_payment(req: PaymentRequest, request: Request):
    """Approve or decline a charge and record the decision.

    Args:
        req: Validated body containing ``orderId`` and ``amount``.

    Returns:
        PaymentResponse: ``{"approved": bool}``.
    """
    approved = is_approved(req.amount)
    attempt_id = PaymentsRepo().record(order_id=req.orderId, amount=req.amount, approved=approved)
    logger.info(
        "payment processed",
        extra={
            "request_id": getattr(request.state, "request_id", "-"),
            "order_id": req.orderId,
            "amount": str(req.amount),
            "approved": approved,
            "attempt_id": str(attempt_id),
        },
    )
    return PaymentResponse(approved=approved)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = rid
    try:
        response = await call_next(request)
    finally:
        logger.info("request handled", extra={"request_id": rid, "path": request.url.path, "method": request.method})
    response.headers["X-Request-ID"] = rid
    return response
