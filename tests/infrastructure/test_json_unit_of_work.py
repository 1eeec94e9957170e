"""Tests for the JSON ledger unit of work (real files under tmp_path)."""

import itertools
import json
import multiprocessing
import os
import threading
from concurrent.futures import ProcessPoolExecutor
from decimal import Decimal
from pathlib import Path

import pytest

from orderpay.application.checkout import CheckoutHandler
from orderpay.application.dto import OrderItemSpec
from orderpay.application.reconcile_payment import (
    ReconcileOutcome,
    ReconcilePaymentHandler,
)
from orderpay.domain.exceptions import ConflictingOrderState
from orderpay.domain.model.customer import Customer
from orderpay.domain.model.order import Order, OrderLineItem, OrderStatus
from orderpay.domain.model.payment import Payment, PaymentCode, PaymentStatus
from orderpay.domain.model.product import Category, Product
from orderpay.domain.model.value_objects import Money, Quantity
from orderpay.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from tests.fakes import FakeCustomerRepository, FakePaymentGateway, FakeProductRepository


def _order(customer: Customer | None = None) -> Order:
    return Order.create(customer, [
        OrderLineItem(7, "X-Burger", Quantity(2), Money.of("15.00")),
    ])


class TestTransactions:

    def test_creates_empty_ledger(self, tmp_path):
        path = tmp_path / "data" / "ledger.json"
        JsonUnitOfWork(path)
        raw = json.loads(path.read_text())
        assert raw == {
            "sequences": {"order_id": 0, "order_code": 0},
            "orders": [],
            "payments": [],
            "anomalies": [],
        }

    def test_commit_round_trips_order_and_payment(self, tmp_path):
        path = tmp_path / "ledger.json"
        uow = JsonUnitOfWork(path)
        customer = Customer(id=3, name="Alice", document="111")

        with uow:
            order = _order(customer)
            order.code = uow.next_order_code()
            uow.orders.save(order)
            uow.payments.save(Payment.open(
                PaymentCode("P1", "qr", Money.of("30.00")), order_id=order.id,
            ))
            uow.commit()

        with JsonUnitOfWork(path) as other:
            loaded = other.orders.get_by_code(1)
            payment = other.payments.get_by_id("P1")

        assert loaded.id == 1
        assert loaded.customer == customer
        assert loaded.total == Money.of("30.00")
        assert loaded.items[0].unit_price.amount == Decimal("15.00")
        assert loaded.created_at == order.created_at
        assert payment.order_id == loaded.id
        assert payment.status == PaymentStatus.PENDING

    def test_exit_without_commit_discards_everything(self, tmp_path):
        path = tmp_path / "ledger.json"
        uow = JsonUnitOfWork(path)

        with uow:
            order = _order()
            order.code = uow.next_order_code()
            uow.orders.save(order)

        with uow:
            assert uow.orders.list_all() == []
            assert uow.next_order_code() == 1

    def test_exception_rolls_back(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path / "ledger.json")

        with pytest.raises(RuntimeError):
            with uow:
                order = _order()
                order.code = uow.next_order_code()
                uow.orders.save(order)
                raise RuntimeError("boom")

        with uow:
            assert uow.orders.get_by_code(1) is None

    def test_save_is_an_upsert(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path / "ledger.json")
        with uow:
            order = _order()
            order.code = uow.next_order_code()
            uow.orders.save(order)
            order.await_payment()
            uow.orders.save(order)
            uow.commit()

        with uow:
            orders = uow.orders.list_all()
        assert len(orders) == 1
        assert orders[0].status == OrderStatus.PAYMENT_PENDING

    def test_settled_payment_round_trips(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path / "ledger.json")
        payment = Payment.open(PaymentCode("P9", "qr", Money.of("5")), order_id=1)
        payment.settle(PaymentStatus.REJECTED)
        with uow:
            uow.payments.save(payment)
            uow.commit()
        with uow:
            loaded = uow.payments.list_for_order(1)
        assert loaded[0].status == PaymentStatus.REJECTED
        assert loaded[0].settled_at == payment.settled_at

    def test_conflict_anomaly_is_persisted(self, tmp_path):
        path = tmp_path / "ledger.json"
        uow = JsonUnitOfWork(path)
        with uow:
            order = _order()
            order.code = uow.next_order_code()
            order.await_payment()
            order.cancel()
            uow.orders.save(order)
            uow.payments.save(Payment.open(
                PaymentCode("P1", "qr", Money.of("30.00")), order_id=order.id,
            ))
            uow.commit()

        with pytest.raises(ConflictingOrderState):
            ReconcilePaymentHandler(JsonUnitOfWork(path)).handle("P1", "APPROVED")

        raw = json.loads(path.read_text())
        [anomaly] = raw["anomalies"]
        assert anomaly["payment_id"] == "P1"
        assert anomaly["order_code"] == 1
        assert anomaly["order_status"] == "CANCELLED"
        assert anomaly["reported_status"] == "APPROVED"
        assert raw["payments"][0]["status"] == "APPROVED"
        assert raw["orders"][0]["status"] == "CANCELLED"

        with JsonUnitOfWork(path) as other:
            [loaded] = other.anomalies.list_all()
        assert loaded.order_status == OrderStatus.CANCELLED
        assert loaded.reported_status == PaymentStatus.APPROVED

    def test_ledger_without_anomalies_key_still_loads(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps({
            "sequences": {"order_id": 0, "order_code": 0},
            "orders": [],
            "payments": [],
        }))
        with JsonUnitOfWork(path) as uow:
            assert uow.anomalies.list_all() == []


class TestConcurrency:

    def _checkout_handler(self, path):
        return CheckoutHandler(
            uow=JsonUnitOfWork(path),
            product_repo=FakeProductRepository(
                [Product(id=7, name="X-Burger", category=Category.SANDWICH, price=Money.of("15.00"))]
            ),
            customer_repo=FakeCustomerRepository(),
            payment_gateway=_ThreadSafeGateway(),
        )

    def test_concurrent_checkouts_get_unique_codes(self, tmp_path):
        path = tmp_path / "ledger.json"
        JsonUnitOfWork(path)
        codes: list[int] = []
        errors: list[Exception] = []

        def worker():
            try:
                result = self._checkout_handler(path).handle(None, [OrderItemSpec(7, 1)])
                codes.append(result.order.code)
            except Exception as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert sorted(codes) == list(range(1, 21))
        with JsonUnitOfWork(path) as uow:
            assert len(uow.orders.list_all()) == 20

    def test_concurrent_notifications_apply_once(self, tmp_path):
        path = tmp_path / "ledger.json"
        result = self._checkout_handler(path).handle(None, [OrderItemSpec(7, 1)])
        outcomes: list[ReconcileOutcome] = []

        def worker(status):
            handler = ReconcilePaymentHandler(JsonUnitOfWork(path))
            outcomes.append(handler.handle(result.payment_id, status))

        threads = [
            threading.Thread(target=worker, args=("APPROVED" if i % 2 else "REJECTED",))
            for i in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count(ReconcileOutcome.APPLIED) == 1
        assert outcomes.count(ReconcileOutcome.DUPLICATE) == 9
        with JsonUnitOfWork(path) as uow:
            order = uow.orders.get_by_code(result.order.code)
            payment = uow.payments.get_by_id(result.payment_id)
        expected = OrderStatus.PAID if payment.status == PaymentStatus.APPROVED else OrderStatus.PAYMENT_FAILED
        assert order.status == expected

    def test_checkouts_from_separate_processes_are_all_kept(self, tmp_path):
        path = tmp_path / "ledger.json"
        JsonUnitOfWork(path)
        workers, per_worker = 4, 25

        context = multiprocessing.get_context("spawn")
        with ProcessPoolExecutor(max_workers=workers, mp_context=context) as pool:
            batches = list(pool.map(
                _checkout_in_own_process, [str(path)] * workers, [per_worker] * workers,
            ))

        codes = sorted(code for batch in batches for code in batch)
        assert codes == list(range(1, workers * per_worker + 1))
        raw = json.loads(path.read_text())
        assert len(raw["orders"]) == workers * per_worker
        assert len({p["id"] for p in raw["payments"]}) == workers * per_worker
        assert raw["sequences"]["order_code"] == workers * per_worker


_gateway_ids = iter(range(1, 10_000))
_gateway_lock = threading.Lock()


class _ThreadSafeGateway(FakePaymentGateway):
    """Unique payment ids across every instance in the test run."""

    def request_payment_code(self, amount: Money) -> PaymentCode:
        with _gateway_lock:
            payment_id = f"T{next(_gateway_ids)}"
        return PaymentCode(payment_id=payment_id, qr_code="qr", amount=amount)


class _PerProcessGateway(FakePaymentGateway):
    """Payment ids unique across processes: ``<pid>-<n>``."""

    def __init__(self) -> None:
        super().__init__()
        self._seq = itertools.count(1)

    def request_payment_code(self, amount: Money) -> PaymentCode:
        payment_id = f"{os.getpid()}-{next(self._seq)}"
        return PaymentCode(payment_id=payment_id, qr_code="qr", amount=amount)


def _checkout_in_own_process(ledger_path: str, count: int) -> list[int]:
    handler = CheckoutHandler(
        uow=JsonUnitOfWork(Path(ledger_path)),
        product_repo=FakeProductRepository(
            [Product(id=7, name="X-Burger", category=Category.SANDWICH, price=Money.of("15.00"))]
        ),
        customer_repo=FakeCustomerRepository(),
        payment_gateway=_PerProcessGateway(),
    )
    return [
        handler.handle(None, [OrderItemSpec(7, 1)]).order.code for _ in range(count)
    ]
