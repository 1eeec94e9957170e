"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

# <repo>/data for a source checkout.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_PAYMENT_URL = "http://localhost:3001"
DEFAULT_PAYMENT_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    payment_url: str = DEFAULT_PAYMENT_URL
    payment_timeout: float = DEFAULT_PAYMENT_TIMEOUT
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        raw_timeout = env.get("PAYMENT_TIMEOUT", str(DEFAULT_PAYMENT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"PAYMENT_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError("PAYMENT_TIMEOUT must be positive")

        data_dir = env.get("ORDERPAY_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            payment_url=env.get("PAYMENT_URL", DEFAULT_PAYMENT_URL).rstrip("/"),
            payment_timeout=timeout,
            log_level=env.get("ORDERPAY_LOG_LEVEL", "INFO").upper(),
        )
