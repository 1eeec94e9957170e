"""Order repository over the ledger state of a JsonUnitOfWork."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from orderpay.domain.model.customer import Customer
from orderpay.domain.model.order import Order, OrderLineItem, OrderStatus
from orderpay.domain.model.value_objects import Money, Quantity
from orderpay.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, state: dict) -> None:
        self._state = state

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._state["orders"]:
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: int) -> Order | None:
        for raw in self._state["orders"]:
            if raw["code"] == code:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._state["orders"]]
        return sorted(orders, key=lambda o: o.code or 0)

    def save(self, order: Order) -> None:
        orders = self._state["orders"]

        if order.id is None:
            self._state["sequences"]["order_id"] += 1
            order.id = self._state["sequences"]["order_id"]

        # Same id replaces the stored entry
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                return
        orders.append(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        customer = order.customer
        return {
            "id": order.id,
            "code": order.code,
            "customer": (
                {"id": customer.id, "name": customer.name, "document": customer.document}
                if customer
                else None
            ),
            "status": order.status.value,
            "total": str(order.total.amount),
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in raw["items"]
        ]
        customer = raw.get("customer")
        return Order(
            id=raw["id"],
            code=raw["code"],
            customer=Customer(**customer) if customer else None,
            items=items,
            total=Money(Decimal(raw["total"])),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
