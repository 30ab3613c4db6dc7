from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    VERSION: str = "0.1.0"

    # ─── Estimation ───────────────────────────────────────────────────────────
    DEFAULT_SAMPLE_SIZE: int = 100
    DEFAULT_PRECISION: int = 2
    CALIBRATION_PATH: str = "./config/calibration.yaml"

    # ─── Logging ──────────────────────────────────────────────────────────────
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # JSON lines for production, coloured console output otherwise
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
