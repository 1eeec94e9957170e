"""HTTP client for the external payment gateway.

    POST {base_url}/pagamento/qrcode   {"valor": 30.0}
    200 -> {"id": "...", "qrcode": "...", "valor": 30.0}

Whatever goes wrong on the way (timeout, transport error, non-2xx status,
unreadable body) surfaces as GatewayUnavailable.
"""

from __future__ import annotations

import logging

import httpx

from orderpay.domain.exceptions import GatewayUnavailable, ValidationError
from orderpay.domain.gateway.payment_gateway import PaymentGateway
from orderpay.domain.model.payment import PaymentCode
from orderpay.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

QRCODE_PATH = "/pagamento/qrcode"


class HttpPaymentGateway(PaymentGateway):

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def request_payment_code(self, amount: Money) -> PaymentCode:
        try:
            response = self._client.post(QRCODE_PATH, json={"valor": float(amount.amount)})
        except httpx.TimeoutException as exc:
            logger.warning("Payment gateway timed out requesting %s", amount)
            raise GatewayUnavailable("Payment gateway timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Payment gateway unreachable: %s", exc)
            raise GatewayUnavailable(f"Payment gateway unreachable: {exc}") from exc

        if response.is_error:
            logger.warning(
                "Payment gateway answered %s: %s", response.status_code, response.text
            )
            raise GatewayUnavailable(
                f"Payment gateway answered {response.status_code}"
            )

        try:
            body = response.json()
            code = PaymentCode(
                payment_id=str(body["id"]),
                qr_code=str(body["qrcode"]),
                amount=Money.of(body["valor"]),
            )
        except (ValueError, KeyError, TypeError, ValidationError) as exc:
            logger.warning("Unreadable payment gateway response: %r", response.text)
            raise GatewayUnavailable("Malformed payment gateway response") from exc

        logger.debug("Payment gateway opened payment %s for %s", code.payment_id, code.amount)
        return code

    def close(self) -> None:
        self._client.close()
