"""Key-value storage backends.

Defines the KeyValueStore protocol consumed by the favorites store and
provides an in-process backend and a YAML-file backend, plus a factory
that picks one from settings.
"""

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from db_favorites.config import Settings, get_settings
from db_favorites.models import StorageDocument

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Key-value store read or write error."""

    pass


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol defining the interface all key-value backends must implement."""

    def get(self, key: str) -> str | None:
        """Return the raw value stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the raw value stored under key. Raises StorageError on failure."""
        ...


class MemoryKeyValueStore:
    """Process-local key-value store."""

    def __init__(self, entries: dict[str, str] | None = None):
        self._entries: dict[str, str] = dict(entries or {})

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value


class FileKeyValueStore:
    """Key-value store persisted as a single YAML document.

    Every write dumps the whole document, so entries stored under other
    keys survive a write to a different key.
    """

    def __init__(self, path: Path):
        """Initialize file store.

        Args:
            path: Path to the YAML storage file (created on first write)
        """
        self.path = Path(path)

    def _load_raw(self) -> Any:
        """Read and parse the YAML file without validating it.

        Raises:
            StorageError: If the file can't be read, decoded or parsed
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

    def _read_document(self) -> StorageDocument | None:
        """Read and validate the storage document.

        Returns:
            StorageDocument, or None if the file doesn't exist

        Raises:
            StorageError: If the file can't be read or isn't a valid document
        """
        if not self.path.exists():
            return None

        data = self._load_raw()
        if data is None:
            return StorageDocument()

        try:
            return StorageDocument.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Invalid storage document {self.path}: {e}") from e

    def _salvage_document(self) -> StorageDocument:
        """Build a fresh document keeping the string entries of an invalid one."""
        try:
            data = self._load_raw()
        except StorageError:
            return StorageDocument()

        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            return StorageDocument()

        kept = {k: v for k, v in entries.items() if isinstance(k, str) and isinstance(v, str)}
        return StorageDocument(entries=kept)

    def get(self, key: str) -> str | None:
        document = self._read_document()
        if document is None:
            return None
        return document.get_entry(key)

    def set(self, key: str, value: str) -> None:
        try:
            document = self._read_document() or StorageDocument()
        except StorageError as e:
            logger.warning(f"Replacing invalid storage document: {e}")
            document = self._salvage_document()

        document.set_entry(key, value)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.dump(
                    document.model_dump(mode="json"),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

        logger.debug(f"Wrote key {key} to {self.path}")


def get_key_value_store(settings: Settings | None = None) -> KeyValueStore:
    """Factory: create a KeyValueStore from settings.

    Args:
        settings: Optional settings. If not provided, uses cached settings.

    Returns:
        A KeyValueStore instance
    """
    if settings is None:
        settings = get_settings()

    if settings.favorites_backend == "memory":
        return MemoryKeyValueStore()
    return FileKeyValueStore(settings.get_effective_storage_path())
