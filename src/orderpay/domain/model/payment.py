"""Payment record — a gateway-issued payment attempt tracked locally.

The gateway owns the payment's lifecycle; locally we only remember what it
told us.  Status moves PENDING -> APPROVED | REJECTED exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderpay.domain.exceptions import DuplicateNotification, ValidationError
from orderpay.domain.model.value_objects import Money


class PaymentStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self != PaymentStatus.PENDING

    @staticmethod
    def parse_settlement(raw: str) -> PaymentStatus:
        """Parse a status reported by the gateway; only terminal ones are valid."""
        try:
            status = PaymentStatus(str(raw).strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown payment status {raw!r}") from None
        if not status.is_terminal:
            raise ValidationError(
                f"Reported status must be APPROVED or REJECTED, got {status.value}"
            )
        return status


@dataclass(frozen=True)
class PaymentCode:
    """What the gateway hands back when asked to open a payment."""

    payment_id: str
    qr_code: str
    amount: Money


@dataclass
class Payment:

    id: str
    order_id: int
    amount: Money
    qr_code: str = ""
    status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    settled_at: datetime | None = None

    @staticmethod
    def open(code: PaymentCode, order_id: int) -> Payment:
        if not code.payment_id:
            raise ValidationError("Payment id is required")
        return Payment(
            id=code.payment_id,
            order_id=order_id,
            amount=code.amount,
            qr_code=code.qr_code,
        )

    def settle(self, status: PaymentStatus) -> None:
        """Record the gateway's final word on this payment.

        Raises DuplicateNotification if the payment was already settled,
        whatever the reported status is: the first terminal status wins.
        """
        if not status.is_terminal:
            raise ValidationError("A payment can only settle as APPROVED or REJECTED")
        if self.status.is_terminal:
            raise DuplicateNotification(
                f"Payment {self.id} already {self.status.value}; "
                f"ignoring {status.value}"
            )
        self.status = status
        self.settled_at = datetime.now(timezone.utc)
