"""Tests for the read-side use cases: payment status, show and list."""

import pytest

from orderpay.application.checkout import CheckoutHandler
from orderpay.application.dto import OrderItemSpec
from orderpay.application.list_orders import ListOrdersHandler
from orderpay.application.payment_status import GetPaymentStatusHandler
from orderpay.application.reconcile_payment import ReconcilePaymentHandler
from orderpay.application.show_order import ShowOrderHandler
from orderpay.domain.exceptions import OrderNotFound
from orderpay.domain.model.customer import Customer
from orderpay.domain.model.order import OrderStatus
from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money
from tests.fakes import (
    FakeCustomerRepository,
    FakePaymentGateway,
    FakeProductRepository,
    FakeUnitOfWork,
)


def _setup():
    uow = FakeUnitOfWork()
    checkout = CheckoutHandler(
        uow=uow,
        product_repo=FakeProductRepository([
            Product(id=7, name="X-Burger", category=Category.SANDWICH, price=Money.of("15.00")),
            Product(id=8, name="Soda", category=Category.DRINK, price=Money.of("6.50")),
        ]),
        customer_repo=FakeCustomerRepository(
            [Customer(id=1, name="Alice", document="111")]
        ),
        payment_gateway=FakePaymentGateway(),
    )
    return uow, checkout


class TestPaymentStatus:

    def test_pending_after_checkout(self):
        uow, checkout = _setup()
        result = checkout.handle(None, [OrderItemSpec(7, 2)])

        dto = GetPaymentStatusHandler(uow).handle(result.order.code)

        assert dto.order_status == "PAYMENT_PENDING"
        assert dto.payment_id == "P1"
        assert dto.payment_status == "PENDING"

    def test_reflects_settlement(self):
        uow, checkout = _setup()
        result = checkout.handle(None, [OrderItemSpec(7, 2)])
        ReconcilePaymentHandler(uow).handle(result.payment_id, "APPROVED")

        dto = GetPaymentStatusHandler(uow).handle(result.order.code)

        assert dto.order_status == "PAID"
        assert dto.payment_status == "APPROVED"

    def test_query_does_not_mutate(self):
        uow, checkout = _setup()
        result = checkout.handle(None, [OrderItemSpec(7, 2)])
        commits = uow.commits
        GetPaymentStatusHandler(uow).handle(result.order.code)
        assert uow.commits == commits

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(OrderNotFound, match="#42"):
            GetPaymentStatusHandler(uow).handle(42)


class TestShowOrder:

    def test_show_by_code(self):
        uow, checkout = _setup()
        result = checkout.handle("111", [OrderItemSpec(7, 1), OrderItemSpec(8, 2)])

        dto = ShowOrderHandler(uow).handle(result.order.code)

        assert dto.code == result.order.code
        assert dto.customer_name == "Alice"
        assert [i.product_name for i in dto.items] == ["X-Burger", "Soda"]
        assert dto.items[1].line_total == "R$ 13.00"
        assert dto.total == "R$ 28.00"

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(uow).handle(1)


class TestListOrders:

    def test_lists_in_code_order(self):
        uow, checkout = _setup()
        checkout.handle(None, [OrderItemSpec(7, 1)])
        checkout.handle(None, [OrderItemSpec(8, 1)])

        dtos = ListOrdersHandler(uow).handle()

        assert [d.code for d in dtos] == [1, 2]

    def test_filters_by_status(self):
        uow, checkout = _setup()
        first = checkout.handle(None, [OrderItemSpec(7, 1)])
        checkout.handle(None, [OrderItemSpec(8, 1)])
        ReconcilePaymentHandler(uow).handle(first.payment_id, "APPROVED")

        dtos = ListOrdersHandler(uow).handle(OrderStatus.PAID)

        assert [d.code for d in dtos] == [first.order.code]

    def test_empty(self):
        uow, _ = _setup()
        assert ListOrdersHandler(uow).handle() == []
