"""Catalog stored as a JSON list in ``products.json``."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money
from orderpay.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, product_id: int) -> Product | None:
        for product in self._load():
            if product.id == product_id:
                return product
        return None

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        for product in self._load():
            if product.name.lower() == wanted:
                return product
        return None

    def list_all(self, category: Category | None = None) -> list[Product]:
        return [
            p for p in self._load() if category is None or p.category == category
        ]

    def save(self, product: Product) -> None:
        products = [p for p in self._load() if p.id != product.id]
        products.append(product)
        products.sort(key=lambda p: p.id)
        self._file_path.write_text(
            json.dumps([self._to_raw(p) for p in products], indent=2) + "\n",
            encoding="utf-8",
        )

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> list[Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return sorted((self._to_domain(item) for item in raw), key=lambda p: p.id)

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "category": product.category.value,
            "registered_at": product.registered_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=int(raw["id"]),
            name=raw["name"],
            price=Money(Decimal(raw["price"])),
            category=Category(raw["category"]),
            description=raw.get("description", ""),
            registered_at=datetime.fromisoformat(raw["registered_at"]),
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
