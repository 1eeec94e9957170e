"""Application service: List Payment Anomalies use case (query)."""

from __future__ import annotations

from orderpay.application.dto import PaymentAnomalyDTO
from orderpay.domain.repository.unit_of_work import UnitOfWork


class ListAnomaliesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[PaymentAnomalyDTO]:
        with self._uow:
            anomalies = self._uow.anomalies.list_all()
        return [PaymentAnomalyDTO.from_anomaly(a) for a in anomalies]
