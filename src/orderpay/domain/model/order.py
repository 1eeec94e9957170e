"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its status.
The total is a snapshot taken when the order is created; the status only
moves forward along ``ALLOWED_TRANSITIONS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderpay.domain.exceptions import ConflictingOrderState, ValidationError
from orderpay.domain.model.customer import Customer
from orderpay.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    RECEIVED = "RECEIVED"
    PAYMENT_PENDING = "PAYMENT_PENDING"
    PAID = "PAID"
    IN_PREPARATION = "IN_PREPARATION"
    READY = "READY"
    COMPLETED = "COMPLETED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.RECEIVED: frozenset(
        {OrderStatus.PAYMENT_PENDING, OrderStatus.CANCELLED}
    ),
    OrderStatus.PAYMENT_PENDING: frozenset(
        {OrderStatus.PAID, OrderStatus.PAYMENT_FAILED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PAID: frozenset({OrderStatus.IN_PREPARATION, OrderStatus.CANCELLED}),
    OrderStatus.IN_PREPARATION: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.PAYMENT_FAILED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# Statuses an operator may move an order into by hand.  Payment driven
# statuses are reserved for the reconciler.
FULFILLMENT_STATUSES = (
    OrderStatus.IN_PREPARATION,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
)


@dataclass(frozen=True)
class OrderLineItem:
    """One product of an order, priced as the catalog listed it at checkout."""

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """A customer order.

    New orders come from ``Order.create()``; the plain constructor is what
    repositories use to load stored orders.
    """

    id: int | None
    code: int | None
    customer: Customer | None
    items: list[OrderLineItem]
    total: Money
    status: OrderStatus = OrderStatus.RECEIVED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(customer: Customer | None, items: list[OrderLineItem]) -> Order:
        """Create a new order in RECEIVED status with a frozen total.

        ``id`` and ``code`` stay empty until the order is persisted.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            code=None,
            customer=customer,
            items=list(items),
            total=total,
        )

    # --- State transitions ----------------------------------------------------

    def await_payment(self) -> None:
        """RECEIVED -> PAYMENT_PENDING, once a payment attempt exists."""
        self._transition(OrderStatus.PAYMENT_PENDING)

    def mark_paid(self) -> None:
        self._require_payment_pending()
        self._transition(OrderStatus.PAID)

    def mark_payment_failed(self) -> None:
        self._require_payment_pending()
        self._transition(OrderStatus.PAYMENT_FAILED)

    def advance_to(self, target: OrderStatus) -> None:
        """Operator driven fulfillment step (preparation, ready, completed)."""
        if target not in FULFILLMENT_STATUSES:
            raise ValidationError(
                f"{target.value} is not a fulfillment status; expected one of "
                + ", ".join(s.value for s in FULFILLMENT_STATUSES)
            )
        self._transition(target)

    def cancel(self) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise ConflictingOrderState(f"Order #{self.code} is already cancelled")
        self._transition(OrderStatus.CANCELLED)

    # --- Internal helpers -----------------------------------------------------

    def _require_payment_pending(self) -> None:
        if self.status != OrderStatus.PAYMENT_PENDING:
            raise ConflictingOrderState(
                f"Order #{self.code} is {self.status.value}, expected PAYMENT_PENDING"
            )

    def _transition(self, target: OrderStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise ConflictingOrderState(
                f"Cannot move order #{self.code} from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target
