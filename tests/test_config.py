"""Tests for settings and the global favorites store."""

from pathlib import Path

import pytest

from db_favorites.config import (
    CONFIG_DIR,
    FAVORITES_STORAGE_KEY,
    Settings,
    get_settings,
    reset_settings,
)
from db_favorites.favorites import get_favorites_store, reset_favorites_store
from db_favorites.storage import FileKeyValueStore, MemoryKeyValueStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "FAVORITES_BACKEND",
        "FAVORITES_STORAGE_KEY",
        "FAVORITES_STORAGE_PATH",
        "CONNECTIONS_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    reset_favorites_store()
    yield
    reset_settings()
    reset_favorites_store()


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.favorites_backend == "file"
        assert settings.favorites_storage_key == FAVORITES_STORAGE_KEY
        assert settings.get_effective_storage_path() == CONFIG_DIR / "storage.yaml"
        assert settings.get_effective_connections_dir() == CONFIG_DIR / "connections"

    def test_explicit_paths(self, tmp_path):
        settings = Settings(
            favorites_storage_path=str(tmp_path / "fav.yaml"),
            connections_dir=str(tmp_path / "conns"),
        )

        assert settings.get_effective_storage_path() == tmp_path / "fav.yaml"
        assert settings.get_effective_connections_dir() == Path(tmp_path / "conns")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FAVORITES_BACKEND", "memory")
        monkeypatch.setenv("FAVORITES_STORAGE_KEY", "custom_key")

        settings = Settings()

        assert settings.favorites_backend == "memory"
        assert settings.favorites_storage_key == "custom_key"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValueError):
            Settings(favorites_backend="s3")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first


class TestGetFavoritesStore:
    def test_memory_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("FAVORITES_BACKEND", "memory")
        monkeypatch.setenv("FAVORITES_STORAGE_KEY", "custom_key")

        store = get_favorites_store()

        assert isinstance(store._backend, MemoryKeyValueStore)
        assert store.key == "custom_key"

    def test_file_backend_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FAVORITES_STORAGE_PATH", str(tmp_path / "s.yaml"))

        store = get_favorites_store()
        store.save(["prod"])

        assert isinstance(store._backend, FileKeyValueStore)
        assert (tmp_path / "s.yaml").exists()

    def test_store_is_cached(self, monkeypatch):
        monkeypatch.setenv("FAVORITES_BACKEND", "memory")

        store = get_favorites_store()
        store.save(["a"])

        assert get_favorites_store() is store
        assert get_favorites_store().load() == ["a"]

    def test_reset_favorites_store(self, monkeypatch):
        monkeypatch.setenv("FAVORITES_BACKEND", "memory")

        first = get_favorites_store()
        reset_favorites_store()

        assert get_favorites_store() is not first
