import click

from orderpay.infrastructure.bootstrap import settings
from orderpay.infrastructure.cli.customer_commands import customer_add, customer_list
from orderpay.infrastructure.cli.order_commands import (
    order_advance,
    order_cancel,
    order_checkout,
    order_list,
    order_show,
)
from orderpay.infrastructure.cli.payment_commands import (
    payment_anomalies,
    payment_notify,
    payment_status,
)
from orderpay.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from orderpay.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """orderpay — orders and payment settlement"""
    configure_logging(settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def payment() -> None:
    """Payment notifications and status."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


# Register subcommands
order.add_command(order_advance)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
payment.add_command(payment_anomalies)
payment.add_command(payment_notify)
payment.add_command(payment_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
customer.add_command(customer_add)
customer.add_command(customer_list)
