"""Port for the external payment gateway."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.payment import PaymentCode
from orderpay.domain.model.value_objects import Money


class PaymentGateway(ABC):

    @abstractmethod
    def request_payment_code(self, amount: Money) -> PaymentCode:
        """Open a payment for *amount* and return its scannable code.

        Raises GatewayUnavailable when the gateway fails or times out.
        """
