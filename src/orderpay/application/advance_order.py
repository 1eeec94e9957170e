"""Application service: Advance Order use case.

Moves a paid order through preparation: PAID -> IN_PREPARATION -> READY
-> COMPLETED.  Payment statuses are never set here; only the reconciler
does that.
"""

from __future__ import annotations

import logging

from orderpay.application.dto import OrderDTO
from orderpay.domain.exceptions import OrderNotFound, ValidationError
from orderpay.domain.model.order import OrderStatus
from orderpay.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AdvanceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_code: int, target: str) -> OrderDTO:
        try:
            status = OrderStatus(target.strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown order status {target!r}") from None

        with self._uow:
            order = self._uow.orders.get_by_code(order_code)
            if order is None:
                raise OrderNotFound(f"Order #{order_code} not found")
            previous = order.status
            order.advance_to(status)
            self._uow.orders.save(order)
            self._uow.commit()

        logger.info(
            "Order #%s advanced %s -> %s", order_code, previous.value, status.value
        )
        return OrderDTO.from_order(order)
