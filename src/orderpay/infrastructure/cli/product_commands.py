"""CLI commands for the menu catalog."""

from __future__ import annotations

import click

from orderpay.application.add_product import AddProductHandler
from orderpay.application.update_product import UpdateProductHandler
from orderpay.domain.exceptions import DomainException
from orderpay.domain.model.product import Category
from orderpay.infrastructure.bootstrap import product_repository

_CATEGORY = click.Choice([c.value for c in Category], case_sensitive=False)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--category", required=True, type=_CATEGORY, help="Menu category.")
@click.option("--description", default="", help="Short description.")
def product_add(name: str, price: str, category: str, description: str) -> None:
    """Register a product on the menu."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, category=category, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added to "
        f"{product.category.value} at {product.price}"
    )


@click.command("list")
@click.option("--category", default=None, type=_CATEGORY, help="Only this category.")
def product_list(category: str | None) -> None:
    """List the menu, optionally one category."""
    wanted = Category.parse(category) if category else None
    products = product_repository().list_all(wanted)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<10} {'Price':>12}  Registered")
    click.echo("-" * 70)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category.value:<10} {str(p.price):>12}  "
            f"{p.registered_at:%Y-%m-%d}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--category", default=None, type=_CATEGORY, help="New category.")
def product_update(product_id: int, price: str | None, category: str | None) -> None:
    """Reprice or recategorize a product.  Placed orders keep their prices."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, price=price, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} is now {product.category.value} at {product.price}"
    )
