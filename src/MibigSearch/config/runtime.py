"""Runtime domain configuration (logging, SQL tracing)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from MibigSearch.config.common import (
    expect_bool,
    expect_str,
    get_required_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Validated logging settings.

    Attributes:
        level: Console log level, upper-cased.
        to_file: Mirror each command's log to ``<dir>/<action>/``.
        dir: Base directory for log files.
        trace_sql: Log every catalogue SQL statement at DEBUG level.
    """

    level: str
    to_file: bool
    dir: str
    trace_sql: bool = False


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from the ``log`` section.

    ``log.trace_sql`` is optional; the other keys are required.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "log", required=True)
    return RuntimeConfig(
        level=expect_str(get_required_value(section, "level", "log.level"), "log.level").upper(),
        to_file=expect_bool(get_required_value(section, "to_file", "log.to_file"), "log.to_file"),
        dir=expect_str(get_required_value(section, "dir", "log.dir"), "log.dir"),
        trace_sql=expect_bool(section.get("trace_sql", False), "log.trace_sql"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if not config.dir.strip():
        raise ValueError("log.dir must not be empty")
    if config.trace_sql and config.level != "DEBUG" and not config.to_file:
        raise ValueError("log.trace_sql needs log.level DEBUG or log.to_file, otherwise nothing is shown")
