"""Connection discovery for favorites reconciliation.

Connections live one per subdirectory of the connections directory
(~/.db-favorites/connections/<name>); the directory name is the id
referenced by favorites.
"""

import logging
from pathlib import Path

from db_favorites.config import get_settings
from db_favorites.favorites import FavoritesStore, get_favorites_store

logger = logging.getLogger(__name__)


def _resolve_connections_dir(connections_dir: Path | None) -> Path:
    if connections_dir is None:
        return get_settings().get_effective_connections_dir()
    return Path(connections_dir)


def list_connections(connections_dir: Path | None = None) -> list[str]:
    """List all connection names."""
    connections_dir = _resolve_connections_dir(connections_dir)
    if not connections_dir.exists():
        return []
    return sorted([d.name for d in connections_dir.iterdir() if d.is_dir()])


def connection_exists(name: str, connections_dir: Path | None = None) -> bool:
    """Check if a connection exists."""
    return (_resolve_connections_dir(connections_dir) / name).is_dir()


def prune_favorites(
    store: FavoritesStore | None = None, connections_dir: Path | None = None
) -> list[str]:
    """Drop favorites whose connection directory no longer exists.

    Args:
        store: Favorites store. If not provided, uses the global store.
        connections_dir: Connections directory. If not provided, uses settings.

    Returns:
        Remaining favorite connection ids
    """
    if store is None:
        store = get_favorites_store()

    connection_ids = list_connections(connections_dir)
    logger.debug(f"Reconciling favorites against {len(connection_ids)} connections")
    return store.reconcile(connection_ids)
