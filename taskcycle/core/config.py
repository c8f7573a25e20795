"""Configuration management for taskcycle."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment reported to Logfire")

    # Recurrence Scanning
    scan_horizon_days: int = Field(
        default=366, ge=1, description="Maximum number of days scanned when searching for an occurrence"
    )

    # Streaks
    streak_at_risk_threshold: int = Field(
        default=3, ge=1, description="Minimum streak length that triggers an at-risk flag when today is missed"
    )

    # Schedules
    default_timezone: str = Field(default="UTC", description="Timezone identifier recorded on new schedules")


# Application Constants
class Constants:
    """Engine-wide constants."""

    DAYS_IN_WEEK: int = 7
    MONTHS_IN_YEAR: int = 12

    # Interval bounds (mirrors the limits of the frequency editor)
    MIN_INTERVAL: int = 1
    MAX_DAILY_INTERVAL: int = 365
    MAX_WEEKLY_INTERVAL: int = 52
    MAX_MONTHLY_INTERVAL: int = 12
    # Nth-weekday gaps at 12 months reach 371 days, past the scan horizon
    MAX_NTH_WEEKDAY_INTERVAL: int = 11

    # Day indices (0=Sunday, 6=Saturday)
    SUNDAY: int = 0
    SATURDAY: int = 6
    WEEKDAYS: frozenset[int] = frozenset({1, 2, 3, 4, 5})
    WEEKEND_DAYS: frozenset[int] = frozenset({0, 6})
    ALL_DAYS: frozenset[int] = frozenset(range(7))

    # Week of month (5 means "last")
    FIRST_WEEK_OF_MONTH: int = 1
    LAST_WEEK_OF_MONTH: int = 5

    MAX_DAY_OF_MONTH: int = 31

    SERVICE_NAME: str = "taskcycle"
    SERVICE_VERSION: str = "0.1.0"


def get_settings() -> Settings:
    """Get engine settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
