"""Pydantic models for persisted storage documents."""

from pydantic import BaseModel, Field


class StorageDocument(BaseModel):
    """Key-value document backing the file store (storage.yaml)."""

    version: str = Field(default="1.0.0")
    entries: dict[str, str] = Field(
        default_factory=dict, description="Raw serialized values keyed by storage key"
    )

    def get_entry(self, key: str) -> str | None:
        """Get the raw value stored under key."""
        return self.entries.get(key)

    def set_entry(self, key: str, value: str) -> None:
        """Replace the raw value stored under key."""
        self.entries[key] = value
