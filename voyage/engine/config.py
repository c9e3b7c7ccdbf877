"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="VOYAGE_", extra="ignore"
    )

    # Settlement reference point when a trip has no host flagged
    default_reference_member_id: str = "me"

    # Timeline durations
    process_default_duration: str = "60 min"
    transport_fallback_min: int = 30

    # Gap connectors between consecutive stay activities (off by default)
    insert_gap_connectors: bool = False
    gap_connector_duration: str = "15 min"

    # Ledger
    default_currency: str = "TWD"
    money_tolerance: float = 0.005


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
