"""Persisted favorite connections for the database client."""

from db_favorites.config import FAVORITES_STORAGE_KEY, Settings, get_settings, reset_settings
from db_favorites.connections import connection_exists, list_connections, prune_favorites
from db_favorites.favorites import (
    FavoritesStore,
    get_favorites_store,
    normalize_favorite_ids,
    reset_favorites_store,
)
from db_favorites.models import StorageDocument
from db_favorites.storage import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    StorageError,
    get_key_value_store,
)

__version__ = "0.1.0"

__all__ = [
    # Favorites
    "FAVORITES_STORAGE_KEY",
    "FavoritesStore",
    "normalize_favorite_ids",
    "get_favorites_store",
    "reset_favorites_store",
    # Storage
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "StorageDocument",
    "StorageError",
    "get_key_value_store",
    # Connections
    "list_connections",
    "connection_exists",
    "prune_favorites",
    # Config
    "Settings",
    "get_settings",
    "reset_settings",
]
