"""Reprice or recategorize a menu item."""

from __future__ import annotations

from orderpay.domain.exceptions import ProductNotFound, ValidationError
from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money
from orderpay.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: int,
        price: str | None = None,
        category: str | None = None,
    ) -> Product:
        if price is None and category is None:
            raise ValidationError("Nothing to update: give a price or a category")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product #{product_id} not found")

        if price is not None:
            product.reprice(Money.of(price))
        if category is not None:
            product.move_to(Category.parse(category))
        self._product_repo.save(product)
        return product
