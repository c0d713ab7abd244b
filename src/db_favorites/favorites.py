"""Favorite connection persistence.

Read failures degrade to an empty list and write failures are logged and
dropped; storage errors never reach the caller.

The record is a JSON array of connection ids stored under a single key:

    ["prod", "staging"]
"""

import json
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from db_favorites.config import FAVORITES_STORAGE_KEY, get_settings
from db_favorites.storage import KeyValueStore, get_key_value_store

logger = logging.getLogger(__name__)


def normalize_favorite_ids(value: Any) -> list[str]:
    """Normalize raw favorites content into an ordered, deduplicated id list.

    Non-sequence values yield an empty list. Non-string entries are dropped,
    strings are trimmed, empty strings are dropped and the first occurrence
    of each id wins.

    Args:
        value: Parsed record content or caller-supplied ids

    Returns:
        Normalized list of connection ids
    """
    if not isinstance(value, (list, tuple)):
        return []

    normalized: list[str] = []
    seen: set[str] = set()

    for entry in value:
        if not isinstance(entry, str):
            continue
        connection_id = entry.strip()
        if not connection_id or connection_id in seen:
            continue
        seen.add(connection_id)
        normalized.append(connection_id)

    return normalized


class FavoritesStore:
    """Ordered set of favorite connection ids backed by a key-value store."""

    def __init__(self, backend: KeyValueStore, key: str = FAVORITES_STORAGE_KEY):
        """Initialize favorites store.

        Args:
            backend: Key-value store holding the serialized record
            key: Storage key of the favorites record
        """
        self._backend = backend
        self.key = key

    def _read_record(self) -> list[str]:
        """Read and normalize the stored record (may raise)."""
        raw = self._backend.get(self.key)
        if not raw:
            return []
        return normalize_favorite_ids(json.loads(raw))

    def _write_record(self, connection_ids: Sequence[str]) -> dict:
        """Normalize and write the record, replacing any prior value.

        Returns:
            Dict with save status
        """
        normalized = normalize_favorite_ids(connection_ids)
        try:
            self._backend.set(self.key, json.dumps(normalized))
            return {"saved": True, "key": self.key, "error": None}
        except Exception as e:
            return {"saved": False, "key": self.key, "error": str(e)}

    def load(self) -> list[str]:
        """Load favorite connection ids.

        Returns:
            Normalized ids (empty if the record is missing, unreadable or malformed)
        """
        try:
            return self._read_record()
        except Exception as e:
            logger.warning(f"Failed to load favorite connections: {e}")
            return []

    def _persist(self, connection_ids: Sequence[str]) -> bool:
        """Write the record, logging a failure. Returns True if it was saved."""
        result = self._write_record(connection_ids)
        if not result["saved"]:
            logger.warning(f"Failed to save favorite connections: {result['error']}")
        return result["saved"]

    def save(self, connection_ids: Sequence[str]) -> None:
        """Save favorite connection ids, fully replacing the stored record.

        Only a list or tuple counts as a sequence of ids; any other value
        (a set, a generator, a bare string) is saved as an empty record.
        Write failures are logged and otherwise ignored.
        """
        self._persist(connection_ids)

    def reconcile(self, valid_connection_ids: Iterable[str]) -> list[str]:
        """Drop favorites that no longer refer to a valid connection.

        The record is only rewritten when at least one stale id was removed.

        Args:
            valid_connection_ids: Ids of all currently known connections

        Returns:
            Favorites restricted to valid ids, in stored order
        """
        valid_ids = set(valid_connection_ids)
        current = self.load()
        filtered = [connection_id for connection_id in current if connection_id in valid_ids]

        if len(filtered) != len(current) and self._persist(filtered):
            logger.info(f"Pruned {len(current) - len(filtered)} stale favorite connections")

        return filtered

    def is_favorite(self, connection_id: str) -> bool:
        """Check if a connection is a favorite."""
        return connection_id.strip() in self.load()

    def add(self, connection_id: str) -> list[str]:
        """Append a connection to the favorites. Returns the resulting favorites."""
        current = self.load()
        connection_id = connection_id.strip()
        if not connection_id or connection_id in current:
            return current

        updated = [*current, connection_id]
        self.save(updated)
        return updated

    def remove(self, connection_id: str) -> list[str]:
        """Remove a connection from the favorites. Returns the resulting favorites."""
        current = self.load()
        connection_id = connection_id.strip()
        if connection_id not in current:
            return current

        updated = [c for c in current if c != connection_id]
        self.save(updated)
        return updated

    def toggle(self, connection_id: str) -> bool:
        """Toggle a connection's favorite status.

        Returns:
            True if the connection is a favorite afterwards
        """
        if self.is_favorite(connection_id):
            self.remove(connection_id)
            return False
        return connection_id.strip() in self.add(connection_id)


# Global favorites store instance
_favorites_store: FavoritesStore | None = None


def get_favorites_store() -> FavoritesStore:
    """Get the global favorites store instance."""
    global _favorites_store
    if _favorites_store is None:
        settings = get_settings()
        _favorites_store = FavoritesStore(
            get_key_value_store(settings), key=settings.favorites_storage_key
        )
    return _favorites_store


def reset_favorites_store() -> None:
    """Reset the global favorites store (useful for testing)."""
    global _favorites_store
    _favorites_store = None
