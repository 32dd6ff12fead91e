"""Configuration management for palplanner."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PALPLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PalPoints economy
    starting_pal_points: int = Field(default=100, ge=0, description="PalPoints balance on a fresh start")

    # Periodic jobs
    expiration_check_interval_seconds: int = Field(
        default=60, gt=0, description="How often pending tasks are checked for expiry"
    )
    pet_decay_interval_seconds: int = Field(
        default=3600, gt=0, description="How often the pet's happiness and energy decay"
    )

    # Pet
    default_pet_name: str = Field(default="Timo", min_length=1, description="Name given to a new pet")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Tasks
    DEFAULT_TASK_POINTS: int = 10
    DEFAULT_GRACE_PERIOD_MINUTES: int = 30
    MAX_GRACE_PERIOD_MINUTES: int = 7 * 24 * 60

    # Pet stats (all stats live in [0, 1])
    PET_STARTING_HAPPINESS: float = 0.8
    PET_STARTING_ENERGY: float = 0.7
    FEED_ENERGY_BOOST: float = 0.2
    PLAY_HAPPINESS_BOOST: float = 0.2
    PLAY_ENERGY_COST: float = 0.1
    DECAY_STEP: float = 0.05
    STAT_PRECISION: int = 6  # Decimal places kept on stats to avoid float drift at mood thresholds

    # Mood thresholds (exclusive lower bounds)
    MOOD_HAPPY_THRESHOLD: float = 0.7
    MOOD_NEUTRAL_THRESHOLD: float = 0.4

    # Reminders
    DAY_OF_REMINDER_HOUR: int = 9  # 9am on the due date

    # Shop
    STARTER_ITEM_ID: str = "basic_pet_food"


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


constants = Constants()
