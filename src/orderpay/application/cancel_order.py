"""Application service: Cancel Order use case.

Cancellation is a status transition; nothing is deleted.  A payment still
pending at the gateway is left as is: if it is approved later the
reconciler reports the conflict to an operator.
"""

from __future__ import annotations

import logging

from orderpay.domain.exceptions import OrderNotFound
from orderpay.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_code: int) -> None:
        with self._uow:
            order = self._uow.orders.get_by_code(order_code)
            if order is None:
                raise OrderNotFound(f"Order #{order_code} not found")
            order.cancel()
            self._uow.orders.save(order)
            self._uow.commit()

        logger.info("Order #%s cancelled", order_code)
