"""Configuration for db-favorites."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Key the favorites record is stored under. Changing it orphans existing data.
FAVORITES_STORAGE_KEY = "qoredb_favorite_connections"

CONFIG_DIR = Path.home() / ".db-favorites"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Favorites storage
    # ==========================================================================

    favorites_backend: Literal["file", "memory"] = Field(
        default="file",
        description="Key-value backend: 'file' for a YAML file, 'memory' for process-local",
    )

    favorites_storage_key: str = Field(
        default=FAVORITES_STORAGE_KEY,
        description="Key the favorites record is stored under",
    )

    favorites_storage_path: str = Field(
        default="",
        description="Path to the YAML storage file (file backend only)",
    )

    # ==========================================================================
    # Connections
    # ==========================================================================

    connections_dir: str = Field(
        default="",
        description="Base directory holding one subdirectory per connection",
    )

    def get_effective_storage_path(self) -> Path:
        """Get the storage file path, falling back to ~/.db-favorites/storage.yaml."""
        if self.favorites_storage_path:
            return Path(self.favorites_storage_path)
        return CONFIG_DIR / "storage.yaml"

    def get_effective_connections_dir(self) -> Path:
        """Get the connections directory, falling back to ~/.db-favorites/connections."""
        if self.connections_dir:
            return Path(self.connections_dir)
        return CONFIG_DIR / "connections"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    global _settings
    _settings = None
