"""Anomaly repository over the ledger state of a JsonUnitOfWork."""

from __future__ import annotations

from datetime import datetime

from orderpay.domain.model.anomaly import PaymentAnomaly
from orderpay.domain.model.order import OrderStatus
from orderpay.domain.model.payment import PaymentStatus
from orderpay.domain.repository.anomaly_repository import AnomalyRepository


class JsonAnomalyRepository(AnomalyRepository):

    def __init__(self, state: dict) -> None:
        # Ledgers written before anomalies were recorded have no such key.
        self._anomalies: list[dict] = state.setdefault("anomalies", [])

    def add(self, anomaly: PaymentAnomaly) -> None:
        self._anomalies.append(self._to_raw(anomaly))

    def list_all(self) -> list[PaymentAnomaly]:
        return [self._to_domain(raw) for raw in self._anomalies]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(anomaly: PaymentAnomaly) -> dict:
        return {
            "payment_id": anomaly.payment_id,
            "order_id": anomaly.order_id,
            "order_code": anomaly.order_code,
            "order_status": anomaly.order_status.value if anomaly.order_status else None,
            "reported_status": anomaly.reported_status.value,
            "reason": anomaly.reason,
            "detected_at": anomaly.detected_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PaymentAnomaly:
        order_status = raw.get("order_status")
        return PaymentAnomaly(
            payment_id=raw["payment_id"],
            order_id=raw["order_id"],
            order_code=raw.get("order_code"),
            order_status=OrderStatus(order_status) if order_status else None,
            reported_status=PaymentStatus(raw["reported_status"]),
            reason=raw["reason"],
            detected_at=datetime.fromisoformat(raw["detected_at"]),
        )
