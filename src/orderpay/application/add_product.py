"""Register a menu item."""

from __future__ import annotations

import logging

from orderpay.domain.exceptions import ValidationError
from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money
from orderpay.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, name: str, price: str, category: str, description: str = ""
    ) -> Product:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Product name is required")
        if self._product_repo.get_by_name(name) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        product = Product(
            id=max((p.id for p in self._product_repo.list_all()), default=0) + 1,
            name=name,
            price=Money.zero(),
            category=Category.parse(category),
            description=description.strip(),
        )
        product.reprice(Money.of(price))
        self._product_repo.save(product)
        logger.info(
            "Product #%s %s registered in %s at %s",
            product.id, product.name, product.category.value, product.price,
        )
        return product
