"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

import json
from pathlib import Path

from orderpay.domain.model.customer import Customer
from orderpay.domain.repository.customer_repository import CustomerRepository


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_document(self, document: str) -> Customer | None:
        for customer in self._load():
            if customer.document == document:
                return customer
        return None

    def list_all(self) -> list[Customer]:
        return self._load()

    def save(self, customer: Customer) -> None:
        customers = [c for c in self._load() if c.id != customer.id]
        customers.append(customer)
        customers.sort(key=lambda c: c.id)
        self._file_path.write_text(
            json.dumps(
                [{"id": c.id, "name": c.name, "document": c.document} for c in customers],
                indent=2,
            )
            + "\n",
            encoding="utf-8",
        )

    def _load(self) -> list[Customer]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return [Customer(id=c["id"], name=c["name"], document=c["document"]) for c in raw]

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
