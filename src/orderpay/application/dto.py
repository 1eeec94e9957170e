"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderpay.domain.model.anomaly import PaymentAnomaly
from orderpay.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "R$ 15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    code: int
    customer_name: str | None
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            code=order.code,  # type: ignore[arg-type]
            customer_name=order.customer.name if order.customer else None,
            status=order.status.value,
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    """Output: the new order plus what the customer needs to pay it."""

    order: OrderDTO
    payment_id: str
    qr_code: str


@dataclass(frozen=True)
class PaymentStatusDTO:
    """Output: combined order/payment view for clients polling settlement."""

    order_code: int
    order_status: str
    payment_id: str | None
    payment_status: str | None


@dataclass(frozen=True)
class PaymentAnomalyDTO:
    """Output: a settlement an operator has to resolve by hand."""

    payment_id: str
    reported_status: str
    order_code: int | None
    order_status: str | None
    reason: str
    detected_at: str

    @staticmethod
    def from_anomaly(anomaly: PaymentAnomaly) -> PaymentAnomalyDTO:
        return PaymentAnomalyDTO(
            payment_id=anomaly.payment_id,
            reported_status=anomaly.reported_status.value,
            order_code=anomaly.order_code,
            order_status=anomaly.order_status.value if anomaly.order_status else None,
            reason=anomaly.reason,
            detected_at=anomaly.detected_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
