"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatasetSettings(BaseSettings):
    """Dataset source settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DATASET_", extra="ignore")

    # Tried in order, first one that resolves wins (DATASET_SOURCES='["..."]')
    sources: list[str] = ["../base.csv", "base.csv", "/base.csv", "/src/base.csv"]
    base_dir: str = ""  # Relative local paths are resolved against this
    timeout: float = 15.0  # Seconds, per HTTP candidate


class PhotoSettings(BaseSettings):
    """Photo URL normalization settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PHOTO_", extra="ignore")

    thumbnail_width: int = 800
    max_photos: int = 10
    placeholder_url: str = "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800"
    proxy_url: str = ""  # PHOTO_PROXY_URL, image proxy for drive files


class SelectionSettings(BaseSettings):
    """Selection resolution settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SELECTION_", extra="ignore")

    sample_size: int = 5  # Unresolved ids echoed back in diagnostics


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    dataset: DatasetSettings = DatasetSettings()
    photos: PhotoSettings = PhotoSettings()
    selection: SelectionSettings = SelectionSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
