"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from orderpay.infrastructure.config import DEFAULT_DATA_DIR, Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.payment_url == "http://localhost:3001"
        assert settings.payment_timeout == 5.0
        assert settings.log_level == "INFO"

    def test_overrides(self, tmp_path):
        settings = Settings.from_env({
            "ORDERPAY_DATA_DIR": str(tmp_path),
            "PAYMENT_URL": "http://pay.local/",
            "PAYMENT_TIMEOUT": "2.5",
            "ORDERPAY_LOG_LEVEL": "debug",
        })
        assert settings.data_dir == Path(tmp_path)
        assert settings.payment_url == "http://pay.local"
        assert settings.payment_timeout == 2.5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value):
        with pytest.raises(ValueError, match="PAYMENT_TIMEOUT"):
            Settings.from_env({"PAYMENT_TIMEOUT": value})
