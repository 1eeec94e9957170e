"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its internal ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: int) -> Order | None:
        """Return an order by its public code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, ordered by code."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning ``id`` on first save."""
