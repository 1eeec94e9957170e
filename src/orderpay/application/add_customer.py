"""Application service: Add Customer use case."""

from __future__ import annotations

from orderpay.domain.exceptions import ValidationError
from orderpay.domain.model.customer import Customer
from orderpay.domain.repository.customer_repository import CustomerRepository


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, name: str, document: str) -> Customer:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if not document or not document.strip():
            raise ValidationError("Customer document is required")

        document = document.strip()
        if self._customer_repo.get_by_document(document) is not None:
            raise ValidationError(f"Customer with document '{document}' already exists")

        next_id = max((c.id for c in self._customer_repo.list_all()), default=0) + 1
        customer = Customer(id=next_id, name=name.strip(), document=document)
        self._customer_repo.save(customer)
        return customer
