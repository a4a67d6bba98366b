"""Configuration management for tideflow."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name reported to Logfire")

    # Reflection Configuration
    reflection_window_days: int = Field(
        default=7,
        ge=1,
        description="Number of most recent day buckets used for insights and timer data",
    )

    # Store Snapshot Configuration (optional)
    store_snapshot_path: str | None = Field(
        default=None,
        description="JSON file the task store is loaded from on startup and saved to on shutdown",
    )

    def require_snapshot_path(self) -> Path:
        """Return the configured snapshot path, raising a clear error if missing.

        Raises:
            ValueError: If the snapshot path is None or empty
        """
        if not self.store_snapshot_path:
            raise ValueError(
                "Task store snapshot path not configured. "
                "Set STORE_SNAPSHOT_PATH environment variable or add to .env file."
            )
        return Path(self.store_snapshot_path)


# Application Constants
class Constants:
    """Application-wide constants."""

    # Date keys
    DATE_KEY_FORMAT: str = "%Y-%m-%d"
    WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

    # Focus block durations offered when adding or editing tasks (minutes)
    DURATION_OPTIONS: tuple[int, ...] = (15, 25, 45, 52, 90, 120)
    DEFAULT_QUICK_ADD_DURATION: int = 25

    # Classifier durations (minutes)
    HIGH_ENERGY_DURATION: int = 40
    HIGH_ENERGY_SESSION_DURATION: int = 60
    MEDIUM_ENERGY_DURATION: int = 40
    LOW_ENERGY_DURATION: int = 20

    # Classifier word-count fallback thresholds
    COMPLEX_TITLE_WORDS: int = 8
    STANDARD_TITLE_WORDS: int = 4

    # Insight thresholds
    EXCEL_COMPLETION_RATE: float = 0.7
    LOW_COMPLETION_RATE: float = 0.5
    LOW_COMPLETION_MIN_TASKS: int = 3
    FOCUS_TIP_MAX_MINUTES: int = 60
    RESCHEDULE_WARNING_MIN_COUNT: int = 1


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
