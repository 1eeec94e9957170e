"""Application service: List Orders use case (query)."""

from __future__ import annotations

from orderpay.application.dto import OrderDTO
from orderpay.domain.model.order import OrderStatus
from orderpay.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, status: OrderStatus | None = None) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_all()
        return [
            OrderDTO.from_order(order)
            for order in orders
            if status is None or order.status == status
        ]
