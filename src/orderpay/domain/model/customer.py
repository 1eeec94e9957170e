"""Customer — an optional party to an order, identified by a document number."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:

    id: int
    name: str
    document: str
