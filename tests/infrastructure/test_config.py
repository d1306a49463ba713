"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from shopcore.infrastructure.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SHOPCORE_EXPORT_SIZE_CEILING", "SHOPCORE_EXPORT_CHUNK_SIZE", "SHOPCORE_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.export_size_ceiling == 10_000
        assert settings.export_chunk_size == 1_000
        assert settings.invoice_render_timeout_seconds == 15.0
        assert settings.log_format == "console"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHOPCORE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SHOPCORE_EXPORT_CHUNK_SIZE", "250")
        settings = Settings(_env_file=None)

        assert settings.export_chunk_size == 250
        assert settings.store_path == tmp_path / "store.json"
        assert settings.carts_dir == tmp_path / "carts"

    def test_bad_log_format(self, monkeypatch):
        monkeypatch.setenv("SHOPCORE_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_chunk_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("SHOPCORE_EXPORT_CHUNK_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
