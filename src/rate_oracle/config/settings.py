"""
Settings — конфигурация развертывания оракула.

Pydantic Settings: переменные окружения с префиксом RATE_ORACLE_ и .env файл.

Пример:
    RATE_ORACLE_MAX_RATE_CAP=1000000003022265980097387650
    RATE_ORACLE_STRICT_SAME_TIMESTAMP=true
    RATE_ORACLE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rate_oracle.core.math.fixed_point import RAY


class OracleSettings(BaseSettings):
    """Настройки, загружаемые из окружения."""

    model_config = SettingsConfigDict(
        env_prefix="RATE_ORACLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Acceptance ---
    max_rate_cap: int = Field(default=0, ge=0)  # 0 — cap отключён
    strict_same_timestamp: bool = Field(default=False)

    # --- Logging ---
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @field_validator("max_rate_cap")
    @classmethod
    def _check_cap(cls, v: int) -> int:
        if v != 0 and v < RAY:
            raise ValueError(f"max_rate_cap must be 0 or >= RAY ({RAY}), got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings() -> OracleSettings:
    return OracleSettings()
