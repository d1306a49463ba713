"""Environment-driven settings via pydantic-settings.

Every setting can be overridden with a ``SHOPCORE_``-prefixed variable
or a ``.env`` file. ``get_settings()`` is cached, one instance per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHOPCORE_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Storage
    data_dir: Path = _DEFAULT_DATA_DIR

    # Export
    export_size_ceiling: int = Field(default=10_000, ge=0)
    export_chunk_size: int = Field(default=1_000, ge=1)

    # Invoice
    invoice_render_timeout_seconds: float = Field(default=15.0, gt=0)
    company_name: str = "Product System"
    company_email: str = "info@productsystem.com"
    company_support_email: str = "support@productsystem.com"

    # Observability
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    @property
    def store_path(self) -> Path:
        return self.data_dir / "store.json"

    @property
    def carts_dir(self) -> Path:
        return self.data_dir / "carts"


@lru_cache
def get_settings() -> Settings:
    return Settings()
