"""Abstract repository for customers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_document(self, document: str) -> Customer | None:
        """Return the customer holding *document*, or None."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every registered customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""
