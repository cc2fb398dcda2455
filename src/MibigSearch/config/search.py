from __future__ import annotations

"""Search domain configuration for query evaluation."""

from dataclasses import dataclass
from typing import Any, Mapping

from MibigSearch.config.common import (
    expect_bool,
    expect_int,
    expect_optional_float,
    get_section,
)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Query evaluation settings.

    Attributes:
        parallel: Evaluate the two sides of each operation concurrently.
        max_workers: Worker threads for parallel evaluation.
        timeout: Evaluation deadline in seconds, None for no deadline.
    """

    parallel: bool = False
    max_workers: int = 4
    timeout: float | None = None


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config; every key is optional."""
    section = get_section(raw, "search", required=False)
    defaults = SearchConfig()
    return SearchConfig(
        parallel=expect_bool(section.get("parallel", defaults.parallel), "search.parallel"),
        max_workers=expect_int(section.get("max_workers", defaults.max_workers), "search.max_workers"),
        timeout=expect_optional_float(section.get("timeout", defaults.timeout), "search.timeout"),
    )


def check_search(config: SearchConfig) -> None:
    if config.max_workers < 1:
        raise ValueError("search.max_workers must be >= 1")
    if config.timeout is not None and config.timeout <= 0:
        raise ValueError("search.timeout must be positive or null")
