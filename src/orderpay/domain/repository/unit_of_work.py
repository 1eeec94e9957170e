"""Abstract unit of work over the order ledger.

Orders, payments, recorded anomalies and the order-code sequence live
behind one transaction boundary.  Entering the context starts a
transaction and serializes it against every other transaction on the
same store; leaving it without ``commit()`` discards every change,
including allocated codes.

    with uow:
        order = uow.orders.get_by_code(code)
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.repository.anomaly_repository import AnomalyRepository
from orderpay.domain.repository.order_repository import OrderRepository
from orderpay.domain.repository.payment_repository import PaymentRepository


class UnitOfWork(ABC):

    orders: OrderRepository
    payments: PaymentRepository
    anomalies: AnomalyRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._end()

    @abstractmethod
    def next_order_code(self) -> int:
        """Allocate the next public order code (monotonic, gaps allowed)."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change since the last commit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op right after ``commit()``."""

    @abstractmethod
    def _begin(self) -> None:
        """Take the store lock and load a working copy."""

    @abstractmethod
    def _end(self) -> None:
        """Release the store lock."""
