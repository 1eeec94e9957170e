"""Payment repository over the ledger state of a JsonUnitOfWork."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from orderpay.domain.model.payment import Payment, PaymentStatus
from orderpay.domain.model.value_objects import Money
from orderpay.domain.repository.payment_repository import PaymentRepository


class JsonPaymentRepository(PaymentRepository):

    def __init__(self, state: dict) -> None:
        self._state = state

    def get_by_id(self, payment_id: str) -> Payment | None:
        for raw in self._state["payments"]:
            if raw["id"] == payment_id:
                return self._to_domain(raw)
        return None

    def list_for_order(self, order_id: int) -> list[Payment]:
        return [
            self._to_domain(raw)
            for raw in self._state["payments"]
            if raw["order_id"] == order_id
        ]

    def save(self, payment: Payment) -> None:
        payments = self._state["payments"]
        for i, raw in enumerate(payments):
            if raw["id"] == payment.id:
                payments[i] = self._to_raw(payment)
                return
        payments.append(self._to_raw(payment))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(payment: Payment) -> dict:
        return {
            "id": payment.id,
            "order_id": payment.order_id,
            "amount": str(payment.amount.amount),
            "qr_code": payment.qr_code,
            "status": payment.status.value,
            "created_at": payment.created_at.isoformat(),
            "settled_at": payment.settled_at.isoformat() if payment.settled_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Payment:
        settled_at = raw.get("settled_at")
        return Payment(
            id=raw["id"],
            order_id=raw["order_id"],
            amount=Money(Decimal(raw["amount"])),
            qr_code=raw.get("qr_code", ""),
            status=PaymentStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            settled_at=datetime.fromisoformat(settled_at) if settled_at else None,
        )
