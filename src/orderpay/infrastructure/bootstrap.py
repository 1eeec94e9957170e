"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from orderpay.infrastructure.config import Settings
from orderpay.infrastructure.gateway.http_payment_gateway import HttpPaymentGateway
from orderpay.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from orderpay.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderpay.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def settings() -> Settings:
    return Settings.from_env()


def unit_of_work() -> JsonUnitOfWork:
    return JsonUnitOfWork(settings().data_dir / "ledger.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def customer_repository() -> JsonCustomerRepository:
    return JsonCustomerRepository(settings().data_dir / "customers.json")


def payment_gateway() -> HttpPaymentGateway:
    config = settings()
    return HttpPaymentGateway(config.payment_url, timeout=config.payment_timeout)
