"""Engine configuration and global value limits."""

from datetime import datetime, timezone
from decimal import Decimal
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hard bounds enforced on wire operands, independent of configuration
NUMERIC_MAX = Decimal("1e20")
NUMERIC_MIN = Decimal("-1e20")
MAX_INT = 2_147_483_647
DATETIME_MIN = datetime(1, 1, 1, tzinfo=timezone.utc)
DATETIME_MAX = datetime(9999, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


class Settings(BaseSettings):
    """Default value-space limits loaded from environment."""

    # Numeric
    numeric_min: Decimal = NUMERIC_MIN
    numeric_max: Decimal = NUMERIC_MAX
    default_numeric_scale: int = 20

    # String
    max_string_length: int = 1000

    # Datetime
    datetime_min: datetime = DATETIME_MIN
    datetime_max: datetime = DATETIME_MAX

    model_config = SettingsConfigDict(
        env_prefix="DATAGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _within_hard_bounds(self) -> "Settings":
        if not NUMERIC_MIN <= self.numeric_min <= self.numeric_max <= NUMERIC_MAX:
            raise ValueError(
                f"numeric limits must satisfy {NUMERIC_MIN} <= min <= max <= {NUMERIC_MAX}"
            )
        if not 0 <= self.max_string_length <= MAX_INT:
            raise ValueError(f"max_string_length must be between 0 and {MAX_INT}")
        if self.default_numeric_scale < 0:
            raise ValueError("default_numeric_scale must not be negative")

        # Naive datetimes from the environment are read as UTC
        if self.datetime_min.tzinfo is None:
            self.datetime_min = self.datetime_min.replace(tzinfo=timezone.utc)
        if self.datetime_max.tzinfo is None:
            self.datetime_max = self.datetime_max.replace(tzinfo=timezone.utc)
        if not DATETIME_MIN <= self.datetime_min <= self.datetime_max <= DATETIME_MAX:
            raise ValueError("datetime limits must lie within years 1 and 9999")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
