"""Storage layer for MibigSearch.

Provides database management, schema migrations and the SQLite catalogue
store consumed by the search services.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from MibigSearch.storage.catalogue import SqliteCatalogueStore
from MibigSearch.storage.db import DatabaseManager
from MibigSearch.storage.migration import run_migrations
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, SqliteCatalogueStore]:
    """Open the configured catalogue database.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, catalogue_store).
    """
    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Catalogue database: %s", db_manager.db_path)
    return db_manager, SqliteCatalogueStore(db_manager)


__all__ = [
    "DatabaseManager",
    "SqliteCatalogueStore",
    "run_migrations",
    "create_storage",
]
