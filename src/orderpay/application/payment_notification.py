"""Inbound entry point for payment gateway notifications.

Validates the raw message, hands it to the reconciler and decides what
the gateway is told.  Only a structurally invalid message is refused;
anything the gateway cannot fix by retrying is acknowledged, so it does
not redeliver forever.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from orderpay.application.reconcile_payment import (
    ReconcileOutcome,
    ReconcilePaymentHandler,
)
from orderpay.domain.exceptions import ConflictingState, PaymentNotFound, ValidationError

logger = logging.getLogger(__name__)

_PAYMENT_ID_KEYS = ("paymentId", "pagamentoId")


class AckOutcome(Enum):
    APPLIED = "APPLIED"
    DUPLICATE = "DUPLICATE"
    UNKNOWN_PAYMENT = "UNKNOWN_PAYMENT"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class NotificationAck:
    payment_id: str
    outcome: AckOutcome


class PaymentNotificationHandler:

    def __init__(self, reconciler: ReconcilePaymentHandler) -> None:
        self._reconciler = reconciler

    def handle(self, payload: Mapping[str, Any]) -> NotificationAck:
        payment_id = self._payment_id(payload)
        status = payload.get("status")
        if status is None:
            raise ValidationError("Notification is missing 'status'")

        try:
            outcome = self._reconciler.handle(payment_id, str(status))
        except PaymentNotFound:
            return NotificationAck(payment_id, AckOutcome.UNKNOWN_PAYMENT)
        except ConflictingState as exc:
            logger.warning(
                "Payment %s reported %s acknowledged as CONFLICT, "
                "operator attention required: %s",
                payment_id, status, exc,
            )
            return NotificationAck(payment_id, AckOutcome.CONFLICT)

        if outcome is ReconcileOutcome.DUPLICATE:
            return NotificationAck(payment_id, AckOutcome.DUPLICATE)
        return NotificationAck(payment_id, AckOutcome.APPLIED)

    @staticmethod
    def _payment_id(payload: Mapping[str, Any]) -> str:
        raw = None
        for key in _PAYMENT_ID_KEYS:
            if key in payload:
                raw = payload[key]
                break
        if isinstance(raw, bool) or not isinstance(raw, (str, int)):
            raise ValidationError("Notification needs a string or integer 'paymentId'")
        payment_id = str(raw).strip()
        if not payment_id:
            raise ValidationError("Notification 'paymentId' is blank")
        return payment_id
