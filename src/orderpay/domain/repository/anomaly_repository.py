"""Abstract repository for recorded payment anomalies (append only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderpay.domain.model.anomaly import PaymentAnomaly


class AnomalyRepository(ABC):

    @abstractmethod
    def add(self, anomaly: PaymentAnomaly) -> None:
        ...

    @abstractmethod
    def list_all(self) -> list[PaymentAnomaly]:
        """Every anomaly, oldest first."""
