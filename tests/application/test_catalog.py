"""Tests for catalog and customer management use cases."""

from datetime import datetime, timezone

import pytest

from orderpay.application.add_customer import AddCustomerHandler
from orderpay.application.add_product import AddProductHandler
from orderpay.application.update_product import UpdateProductHandler
from orderpay.domain.exceptions import ProductNotFound, ValidationError
from orderpay.domain.model.customer import Customer
from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money
from tests.fakes import FakeCustomerRepository, FakeProductRepository


def _soda() -> Product:
    return Product(id=1, name="Soda", category=Category.DRINK, price=Money.of("6.50"))


class TestAddProduct:

    def test_assigns_next_id_and_category(self):
        repo = FakeProductRepository([
            Product(id=7, name="X-Burger", category=Category.SANDWICH, price=Money.of("15")),
        ])
        product = AddProductHandler(repo).handle("Soda", "6.50", "drink", "350ml can")
        assert product.id == 8
        stored = repo.get_by_id(8)
        assert stored.category == Category.DRINK
        assert stored.description == "350ml can"

    def test_stamps_registration_time(self):
        before = datetime.now(timezone.utc)
        product = AddProductHandler(FakeProductRepository()).handle("Fries", "9", "SIDE")
        assert product.id == 1
        assert before <= product.registered_at <= datetime.now(timezone.utc)

    def test_duplicate_name_rejected(self):
        repo = FakeProductRepository([_soda()])
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle("soda", "7.00", "DRINK")

    @pytest.mark.parametrize("price", ["0", "-1", "abc"])
    def test_invalid_price_rejected(self, price):
        repo = FakeProductRepository()
        with pytest.raises(ValidationError):
            AddProductHandler(repo).handle("Soda", price, "DRINK")
        assert repo.list_all() == []

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="Unknown category"):
            AddProductHandler(FakeProductRepository()).handle("Soda", "6.50", "SOUP")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(FakeProductRepository()).handle(" ", "1.00", "DRINK")


class TestUpdateProduct:

    def test_reprices(self):
        repo = FakeProductRepository([_soda()])
        UpdateProductHandler(repo).handle(1, price="7.25")
        assert repo.get_by_id(1).price == Money.of("7.25")
        assert repo.get_by_id(1).category == Category.DRINK

    def test_recategorizes(self):
        repo = FakeProductRepository([_soda()])
        UpdateProductHandler(repo).handle(1, category="dessert")
        assert repo.get_by_id(1).category == Category.DESSERT
        assert repo.get_by_id(1).price == Money.of("6.50")

    def test_nothing_to_update(self):
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateProductHandler(FakeProductRepository([_soda()])).handle(1)

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            UpdateProductHandler(FakeProductRepository()).handle(1, price="7.25")


class TestAddCustomer:

    def test_registers_customer(self):
        repo = FakeCustomerRepository()
        customer = AddCustomerHandler(repo).handle("Alice", " 111 ")
        assert customer == Customer(id=1, name="Alice", document="111")
        assert repo.get_by_document("111") == customer

    def test_duplicate_document_rejected(self):
        repo = FakeCustomerRepository([Customer(id=1, name="Alice", document="111")])
        with pytest.raises(ValidationError, match="already exists"):
            AddCustomerHandler(repo).handle("Bob", "111")
