"""Runtime settings, read from ``PACKSTOCK_*`` environment variables or a
``.env`` file in the project root."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="PACKSTOCK_",
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field("development", description="development, production or test")
    log_level: str = Field("INFO", description="Root log level")
    data_dir: Path = Field(PROJECT_ROOT / "data", description="Directory holding the JSON store files")
    bundle_delete_delay_ms: int = Field(
        0, ge=0, description="Pause between component deletes when clearing a bundle"
    )


def get_settings() -> Settings:
    return Settings()
