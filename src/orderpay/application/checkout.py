"""Application service: Checkout use case.

Builds an order from the requested items, opens a payment for it at the
gateway and only then persists both in a single transaction.  The gateway
call happens outside the transaction so no lock is held across the network.
"""

from __future__ import annotations

import logging

from orderpay.application.dto import CheckoutResultDTO, OrderDTO, OrderItemSpec
from orderpay.domain.exceptions import (
    CustomerNotFound,
    GatewayUnavailable,
    ProductNotFound,
    ValidationError,
)
from orderpay.domain.gateway.payment_gateway import PaymentGateway
from orderpay.domain.model.customer import Customer
from orderpay.domain.model.order import Order, OrderLineItem
from orderpay.domain.model.payment import Payment
from orderpay.domain.model.value_objects import Quantity
from orderpay.domain.repository.customer_repository import CustomerRepository
from orderpay.domain.repository.product_repository import ProductRepository
from orderpay.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        payment_gateway: PaymentGateway,
    ) -> None:
        self._uow = uow
        self._product_repo = product_repo
        self._customer_repo = customer_repo
        self._payment_gateway = payment_gateway

    def handle(
        self,
        customer_document: str | None,
        item_specs: list[OrderItemSpec],
    ) -> CheckoutResultDTO:
        """Create an order and initiate its payment.

        Steps:
        1. Validate the request and resolve customer and products.
        2. Build the Order with *current* prices (snapshot).
        3. Ask the gateway for a payment code; any failure aborts here.
        4. In one transaction: allocate the code, save order and payment.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        customer = self._resolve_customer(customer_document)
        line_items = [self._resolve_item(spec) for spec in item_specs]
        order = Order.create(customer=customer, items=line_items)

        payment_code = self._payment_gateway.request_payment_code(order.total)
        if payment_code.amount != order.total:
            logger.error(
                "Gateway opened payment %s for %s but the order total is %s",
                payment_code.payment_id, payment_code.amount, order.total,
            )
            raise GatewayUnavailable(
                f"Gateway returned amount {payment_code.amount}, "
                f"expected {order.total}"
            )

        with self._uow:
            order.code = self._uow.next_order_code()
            self._uow.orders.save(order)
            payment = Payment.open(payment_code, order_id=order.id)  # type: ignore[arg-type]
            order.await_payment()
            self._uow.orders.save(order)
            self._uow.payments.save(payment)
            self._uow.commit()

        logger.info(
            "Order #%s checked out: total=%s payment=%s",
            order.code, order.total, payment.id,
        )
        return CheckoutResultDTO(
            order=OrderDTO.from_order(order),
            payment_id=payment.id,
            qr_code=payment.qr_code,
        )

    # --- Resolution -----------------------------------------------------------

    def _resolve_customer(self, document: str | None) -> Customer | None:
        if document is None or not document.strip():
            return None
        customer = self._customer_repo.get_by_document(document.strip())
        if customer is None:
            raise CustomerNotFound(f"Customer not found: '{document}'")
        return customer

    def _resolve_item(self, spec: OrderItemSpec) -> OrderLineItem:
        quantity = Quantity(spec.quantity)
        product = self._product_repo.get_by_id(spec.product_id)
        if product is None:
            raise ProductNotFound(f"Product not found: #{spec.product_id}")
        return OrderLineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
        )
