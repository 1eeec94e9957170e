"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderpay.application.dto import OrderDTO
from orderpay.domain.exceptions import OrderNotFound
from orderpay.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_code: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_code(order_code)
        if order is None:
            raise OrderNotFound(f"Order #{order_code} not found")
        return OrderDTO.from_order(order)
