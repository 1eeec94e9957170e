"""Abstract repository for Payment records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.payment import Payment


class PaymentRepository(ABC):

    @abstractmethod
    def get_by_id(self, payment_id: str) -> Payment | None:
        """Return a payment by its gateway-issued ID, or None."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[Payment]:
        """Return every payment of an order, oldest first."""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist a new or updated payment."""
