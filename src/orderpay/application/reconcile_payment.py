"""Application service: Reconcile Payment use case.

Applies a settlement notification from the gateway to the payment record
and the order it settles.  Both changes land in one transaction.  The unit
of work serializes transactions, so two notifications for the same payment
never interleave: the second one sees the first one's terminal status and
is absorbed as a duplicate.

When the order can no longer follow the payment (cancelled meanwhile, or
missing) the payment is still settled and a ``PaymentAnomaly`` is recorded
in the same transaction; the order is left as it is and
``ConflictingOrderState`` is raised to the caller.  A redelivery of that
notification is then an ordinary duplicate.
"""

from __future__ import annotations

import logging
from enum import Enum

from orderpay.domain.exceptions import (
    ConflictingOrderState,
    DuplicateNotification,
    PaymentNotFound,
)
from orderpay.domain.model.anomaly import PaymentAnomaly
from orderpay.domain.model.order import Order
from orderpay.domain.model.payment import Payment, PaymentStatus
from orderpay.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ReconcileOutcome(Enum):
    APPLIED = "APPLIED"
    DUPLICATE = "DUPLICATE"


class ReconcilePaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, payment_id: str, reported_status: str) -> ReconcileOutcome:
        status = PaymentStatus.parse_settlement(reported_status)

        with self._uow:
            payment = self._uow.payments.get_by_id(payment_id)
            if payment is None:
                logger.warning(
                    "Dropping %s notification for unknown payment %s",
                    status.value, payment_id,
                )
                raise PaymentNotFound(f"Payment {payment_id} not found")

            try:
                payment.settle(status)
            except DuplicateNotification as exc:
                logger.info("Duplicate notification absorbed: %s", exc)
                return ReconcileOutcome.DUPLICATE

            order = self._uow.orders.get_by_id(payment.order_id)
            try:
                if order is None:
                    raise ConflictingOrderState(
                        f"Payment {payment_id} references missing order "
                        f"id={payment.order_id}"
                    )
                if status == PaymentStatus.APPROVED:
                    order.mark_paid()
                else:
                    order.mark_payment_failed()
            except ConflictingOrderState as exc:
                self._record_anomaly(payment, order, str(exc))
                raise

            self._uow.payments.save(payment)
            self._uow.orders.save(order)
            self._uow.commit()

        logger.info(
            "Payment %s %s; order #%s is now %s",
            payment_id, status.value, order.code, order.status.value,
        )
        return ReconcileOutcome.APPLIED

    def _record_anomaly(self, payment: Payment, order: Order | None, reason: str) -> None:
        anomaly = PaymentAnomaly.between(payment, order, reason)
        self._uow.payments.save(payment)
        self._uow.anomalies.add(anomaly)
        self._uow.commit()
        logger.error(
            "Payment %s settled %s but order #%s is %s; anomaly recorded: %s",
            payment.id,
            payment.status.value,
            anomaly.order_code,
            anomaly.order_status.value if anomaly.order_status else "missing",
            reason,
        )
