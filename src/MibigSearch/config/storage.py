from __future__ import annotations

"""Storage domain configuration for the catalogue database."""

import os
from dataclasses import dataclass
from typing import Any, Mapping

from MibigSearch.config.common import (
    expect_optional_str,
    expect_str,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage configuration.

    Attributes:
        db_path: Effective SQLite database path.
        db_path_env: Environment variable that overrides ``db_path`` when set.
    """

    db_path: str
    db_path_env: str | None = None


def load_storage(raw: Mapping[str, Any]) -> StorageConfig:
    """Load storage config, applying the environment override if present."""
    section = get_section(raw, "storage", required=True)
    db_path = expect_str(get_required_value(section, "db_path", "storage.db_path"), "storage.db_path")
    db_path_env = expect_optional_str(section.get("db_path_env"), "storage.db_path_env")
    if db_path_env:
        db_path = os.environ.get(db_path_env, db_path)
    return StorageConfig(db_path=db_path, db_path_env=db_path_env)


def check_storage(config: StorageConfig) -> None:
    if not config.db_path.strip():
        raise ValueError("storage.db_path must not be empty")
