"""Catalog port.

Checkout resolves product ids against it; the catalog commands manage it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.product import Category, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Case-insensitive lookup, used to keep names unique."""

    @abstractmethod
    def list_all(self, category: Category | None = None) -> list[Product]:
        """Products ordered by id, optionally only one category."""

    @abstractmethod
    def save(self, product: Product) -> None:
        ...
