"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderpay.application.advance_order import AdvanceOrderHandler
from orderpay.application.cancel_order import CancelOrderHandler
from orderpay.application.checkout import CheckoutHandler
from orderpay.application.dto import OrderDTO, OrderItemSpec
from orderpay.application.list_orders import ListOrdersHandler
from orderpay.application.show_order import ShowOrderHandler
from orderpay.domain.exceptions import DomainException
from orderpay.domain.model.order import FULFILLMENT_STATUSES, OrderStatus
from orderpay.infrastructure.bootstrap import (
    customer_repository,
    payment_gateway,
    product_repository,
    unit_of_work,
)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '7:2,3:1' (product id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.rsplit(":", 1)
        try:
            product_id = int(id_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product id and quantity must be integers."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.code}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name or '-'}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<27} {dto.total:>24}")


@click.command("checkout")
@click.option("--customer", "customer_document", default=None, help="Customer document (optional).")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_checkout(customer_document: str | None, items: str) -> None:
    """Create an order and open its payment at the gateway."""
    specs = _parse_items(items)

    gateway = payment_gateway()
    handler = CheckoutHandler(
        uow=unit_of_work(),
        product_repo=product_repository(),
        customer_repo=customer_repository(),
        payment_gateway=gateway,
    )

    try:
        result = handler.handle(customer_document=customer_document, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        gateway.close()

    _display_order(result.order)
    click.echo()
    click.echo(f"Payment:  {result.payment_id}")
    click.echo(f"QR code:  {result.qr_code}")


@click.command("show")
@click.option("--code", "order_code", required=True, type=int, help="Order code to display.")
def order_show(order_code: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Only orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders."""
    handler = ListOrdersHandler(uow=unit_of_work())
    dtos = handler.handle(OrderStatus(status.upper()) if status else None)

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'Code':<6} {'Status':<16} {'Customer':<20} {'Total':>12}")
    click.echo("-" * 57)
    for dto in dtos:
        click.echo(
            f"{dto.code:<6} {dto.status:<16} {dto.customer_name or '-':<20} {dto.total:>12}"
        )


@click.command("advance")
@click.option("--code", "order_code", required=True, type=int, help="Order code.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in FULFILLMENT_STATUSES], case_sensitive=False),
    help="Fulfillment status to move the order to.",
)
def order_advance(order_code: int, target: str) -> None:
    """Move a paid order through preparation."""
    handler = AdvanceOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_code, target)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.code} is now {dto.status}.")


@click.command("cancel")
@click.option("--code", "order_code", required=True, type=int, help="Order code to cancel.")
def order_cancel(order_code: int) -> None:
    """Cancel an order."""
    handler = CancelOrderHandler(uow=unit_of_work())

    try:
        handler.handle(order_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_code} cancelled.")
