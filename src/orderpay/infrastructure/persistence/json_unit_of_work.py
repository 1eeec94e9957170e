"""JSON-file-backed unit of work over the order ledger.

The whole ledger lives in one file so a transaction is a single atomic
file replace.  A transaction holds two locks from ``__enter__`` to
``__exit__``: a thread lock shared by every instance on the same file,
and a ``filelock.FileLock`` on the ``ledger.json.lock`` sidecar that
serializes separate processes (CLI invocations, workers).  Code
allocation and payment settlement are therefore serialized store-wide.
One instance serves one transaction at a time.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from filelock import FileLock

from orderpay.domain.repository.unit_of_work import UnitOfWork
from orderpay.infrastructure.persistence.json_anomaly_repository import (
    JsonAnomalyRepository,
)
from orderpay.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderpay.infrastructure.persistence.json_payment_repository import (
    JsonPaymentRepository,
)

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


def _empty_ledger() -> dict:
    return {
        "sequences": {"order_id": 0, "order_code": 0},
        "orders": [],
        "payments": [],
        "anomalies": [],
    }


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, file_path: Path, lock_timeout: float = 30.0) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._file_lock = FileLock(f"{self._file_path}.lock", timeout=lock_timeout)
        self._state: dict = {}
        self._ensure_file()

    # --- UnitOfWork interface -------------------------------------------------

    def next_order_code(self) -> int:
        sequences = self._state["sequences"]
        sequences["order_code"] += 1
        return sequences["order_code"]

    def commit(self) -> None:
        self._persist_raw(self._state)

    def rollback(self) -> None:
        self._reload()

    def _begin(self) -> None:
        self._lock.acquire()
        try:
            self._file_lock.acquire()
            try:
                self._reload()
            except BaseException:
                self._file_lock.release()
                raise
        except BaseException:
            self._lock.release()
            raise

    def _end(self) -> None:
        try:
            self._file_lock.release()
        finally:
            self._lock.release()

    # --- File helpers ---------------------------------------------------------

    def _reload(self) -> None:
        self._state = json.loads(self._file_path.read_text(encoding="utf-8"))
        self.orders = JsonOrderRepository(self._state)
        self.payments = JsonPaymentRepository(self._state)
        self.anomalies = JsonAnomalyRepository(self._state)

    def _persist_raw(self, state: dict) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=".ledger-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(state, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock, self._file_lock:
            if not self._file_path.exists():
                self._persist_raw(_empty_ledger())
