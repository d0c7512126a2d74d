# ABOUTME: Configuration module for application settings.
# ABOUTME: Uses pydantic-settings for environment variable overrides and provides cached access.

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from profile_directory.store.service import StoreDelays

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "profiles.json"


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    PROFILE_DIRECTORY_ prefix (e.g., PROFILE_DIRECTORY_SEED_FILE).
    """

    model_config = SettingsConfigDict(
        env_prefix="PROFILE_DIRECTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    seed_file: Annotated[Path, Field(description="JSON file the store is seeded from")] = (
        DEFAULT_SEED_FILE
    )

    get_all_delay_seconds: Annotated[
        float, Field(description="Simulated latency of listing all profiles", ge=0)
    ] = 0.5

    get_by_id_delay_seconds: Annotated[
        float, Field(description="Simulated latency of a lookup by id", ge=0)
    ] = 0.3

    add_delay_seconds: Annotated[
        float, Field(description="Simulated latency of adding a profile", ge=0)
    ] = 0.5

    update_delay_seconds: Annotated[
        float, Field(description="Simulated latency of updating a profile", ge=0)
    ] = 0.5

    delete_delay_seconds: Annotated[
        float, Field(description="Simulated latency of deleting a profile", ge=0)
    ] = 0.5

    search_delay_seconds: Annotated[
        float, Field(description="Simulated latency of a search", ge=0)
    ] = 0.3

    search_debounce_seconds: Annotated[
        float, Field(description="Quiet period before search criteria changes run", ge=0)
    ] = 0.3

    notification_duration_seconds: Annotated[
        float, Field(description="How long a notification stays visible", gt=0)
    ] = 5.0

    log_level: Annotated[str, Field(description="Minimum level for log output")] = "WARNING"

    def store_delays(self) -> StoreDelays:
        """Build the per-operation store delays from these settings.

        Returns:
            StoreDelays populated from the *_delay_seconds settings.
        """
        return StoreDelays(
            get_all=self.get_all_delay_seconds,
            get_by_id=self.get_by_id_delay_seconds,
            add=self.add_delay_seconds,
            update=self.update_delay_seconds,
            delete=self.delete_delay_seconds,
            search=self.search_delay_seconds,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings.

    Returns a cached Settings instance. Use get_settings.cache_clear()
    to clear the cache if needed.

    Returns:
        Cached Settings instance.
    """
    return Settings()
