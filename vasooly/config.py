"""Configuration management"""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Vasooly"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./vasooly.db"

    # Splitting
    currency_symbol: str = "₹"
    min_split_participants: int = 2
    # Largest total a BIGINT column can hold
    max_total_amount_paise: int = 2**63 - 1

    # CORS
    allowed_origins: List[str] = []

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="VASOOLY_", case_sensitive=False, extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL uses an async SQLite or PostgreSQL driver"""
        if not v.startswith(("sqlite+aiosqlite", "postgresql+asyncpg")):
            raise ValueError(
                "DATABASE_URL must be a sqlite+aiosqlite or postgresql+asyncpg URL"
            )
        return v

    @field_validator("min_split_participants")
    @classmethod
    def validate_min_split_participants(cls, v: int) -> int:
        """A split needs at least one participant"""
        if v < 1:
            raise ValueError("MIN_SPLIT_PARTICIPANTS must be at least 1")
        return v

    @field_validator("max_total_amount_paise")
    @classmethod
    def validate_max_total_amount_paise(cls, v: int) -> int:
        """Totals are stored in a signed 64-bit column"""
        if not 1 <= v <= 2**63 - 1:
            raise ValueError("MAX_TOTAL_AMOUNT_PAISE must be between 1 and 2**63 - 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
