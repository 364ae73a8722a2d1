import logging
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Supabase Configuration (only needed when fetching a live snapshot)
    supabase_url: Optional[str] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon key for the Supabase project."
    )
    goal_tables: List[str] = Field(
        default_factory=lambda: ["goals", "unique_goals"],
        description="Tables holding goal events; merged into one leaderboard.",
    )
    fetch_retry_attempts: int = Field(
        3, ge=1, description="Attempts per table fetch before giving up."
    )

    # Standings Configuration
    fair_play_tiebreak: Literal["auto", "always", "never"] = Field(
        "auto",
        description="Use the fair-play tiebreak always, never, or only when card data exists.",
    )
    yellow_card_weight: int = Field(1, ge=0, description="Fair-play demerits per yellow.")
    red_card_weight: int = Field(3, ge=0, description="Fair-play demerits per red.")
    include_ungrouped_table: bool = Field(
        False,
        description="Add a table for matches between teams sharing no group.",
    )

    # Leaderboard Configuration
    leaderboard_size: int = Field(
        3, ge=1, description="How many scorers the exposed leaderboard shows."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
