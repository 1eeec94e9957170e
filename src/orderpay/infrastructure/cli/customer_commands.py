"""CLI commands for customers."""

from __future__ import annotations

import click

from orderpay.application.add_customer import AddCustomerHandler
from orderpay.domain.exceptions import DomainException
from orderpay.infrastructure.bootstrap import customer_repository


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--document", required=True, help="Document number used at checkout.")
def customer_add(name: str, document: str) -> None:
    """Register a customer."""
    handler = AddCustomerHandler(customer_repo=customer_repository())

    try:
        customer = handler.handle(name=name, document=document)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' registered")


@click.command("list")
def customer_list() -> None:
    """List registered customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Document':<16}")
    click.echo("-" * 48)
    for c in customers:
        click.echo(f"{c.id:<6} {c.name:<24} {c.document:<16}")
