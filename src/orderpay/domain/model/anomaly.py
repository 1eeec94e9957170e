"""Settlements the gateway reported that the order could not follow.

The gateway's word on a payment is final, so the payment record is
settled regardless.  When its order is no longer awaiting payment (it was
cancelled, or already settled by another payment) the mismatch is kept as
a ``PaymentAnomaly`` for an operator to resolve, e.g. by refunding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderpay.domain.model.order import Order, OrderStatus
from orderpay.domain.model.payment import Payment, PaymentStatus


@dataclass(frozen=True)
class PaymentAnomaly:

    payment_id: str
    order_id: int
    order_code: int | None
    order_status: OrderStatus | None
    reported_status: PaymentStatus
    reason: str
    detected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def between(payment: Payment, order: Order | None, reason: str) -> PaymentAnomaly:
        """``order`` is None when the payment points at an order that is gone."""
        return PaymentAnomaly(
            payment_id=payment.id,
            order_id=payment.order_id,
            order_code=order.code if order else None,
            order_status=order.status if order else None,
            reported_status=payment.status,
            reason=reason,
        )
