"""CLI commands for payment notifications and status queries."""

from __future__ import annotations

import json

import click

from orderpay.application.list_anomalies import ListAnomaliesHandler
from orderpay.application.payment_notification import PaymentNotificationHandler
from orderpay.application.payment_status import GetPaymentStatusHandler
from orderpay.application.reconcile_payment import ReconcilePaymentHandler
from orderpay.domain.exceptions import DomainException
from orderpay.infrastructure.bootstrap import unit_of_work


@click.command("notify")
@click.option("--payment-id", default=None, help="Gateway payment id.")
@click.option("--status", default=None, help="APPROVED or REJECTED.")
@click.option("--payload", default=None, help="Raw notification JSON, e.g. '{\"paymentId\": \"P1\", \"status\": \"APPROVED\"}'.")
def payment_notify(payment_id: str | None, status: str | None, payload: str | None) -> None:
    """Apply a payment status notification from the gateway."""
    if payload is not None:
        if payment_id is not None or status is not None:
            raise click.UsageError("--payload cannot be combined with --payment-id/--status")
        try:
            message = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--payload")
        if not isinstance(message, dict):
            raise click.BadParameter("Expected a JSON object", param_hint="--payload")
    else:
        message = {}
        if payment_id is not None:
            message["paymentId"] = payment_id
        if status is not None:
            message["status"] = status

    handler = PaymentNotificationHandler(ReconcilePaymentHandler(unit_of_work()))

    try:
        ack = handler.handle(message)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Notification for payment {ack.payment_id} acknowledged ({ack.outcome.value}).")


@click.command("status")
@click.option("--code", "order_code", required=True, type=int, help="Order code.")
def payment_status(order_code: int) -> None:
    """Show the order and payment status of an order."""
    handler = GetPaymentStatusHandler(unit_of_work())

    try:
        dto = handler.handle(order_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_code}: {dto.order_status}")
    if dto.payment_id is None:
        click.echo("Payment: none")
    else:
        click.echo(f"Payment {dto.payment_id}: {dto.payment_status}")


@click.command("anomalies")
def payment_anomalies() -> None:
    """List settlements that conflicted with their order."""
    anomalies = ListAnomaliesHandler(unit_of_work()).handle()

    if not anomalies:
        click.echo("No payment anomalies.")
        return

    for a in anomalies:
        order = f"order #{a.order_code} ({a.order_status})" if a.order_code else "missing order"
        click.echo(
            f"{a.detected_at}  payment {a.payment_id} {a.reported_status} vs {order}: {a.reason}"
        )
