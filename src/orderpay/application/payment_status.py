"""Application service: Payment Status query."""

from __future__ import annotations

from orderpay.application.dto import PaymentStatusDTO
from orderpay.domain.exceptions import OrderNotFound
from orderpay.domain.repository.unit_of_work import UnitOfWork


class GetPaymentStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_code: int) -> PaymentStatusDTO:
        with self._uow:
            order = self._uow.orders.get_by_code(order_code)
            if order is None:
                raise OrderNotFound(f"Order #{order_code} not found")
            payments = self._uow.payments.list_for_order(order.id)  # type: ignore[arg-type]

        latest = payments[-1] if payments else None
        return PaymentStatusDTO(
            order_code=order_code,
            order_status=order.status.value,
            payment_id=latest.id if latest else None,
            payment_status=latest.status.value if latest else None,
        )
