from __future__ import annotations

"""Output domain configuration for result writers."""

from dataclasses import dataclass
from typing import Any, Mapping

from MibigSearch.config.common import (
    expect_str,
    expect_str_list,
    get_required_value,
    get_section,
)

_ALLOWED_FORMATS = ("console", "json")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        base_dir: Directory JSON result files are written to.
        formats: Enabled writers, in declaration order, deduplicated.
    """

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    section = get_section(raw, "output", required=True)
    base_dir = expect_str(get_required_value(section, "base_dir", "output.base_dir"), "output.base_dir")
    formats_raw = expect_str_list(get_required_value(section, "formats", "output.formats"), "output.formats")

    formats: list[str] = []
    for item in formats_raw:
        normalized = item.strip().lower()
        if normalized and normalized not in formats:
            formats.append(normalized)
    return OutputConfig(base_dir=base_dir, formats=tuple(formats))


def check_output(config: OutputConfig) -> None:
    if not config.formats:
        raise ValueError("output.formats must not be empty")
    unknown = [item for item in config.formats if item not in _ALLOWED_FORMATS]
    if unknown:
        raise ValueError(f"output.formats contains unsupported values: {unknown}; allowed: {list(_ALLOWED_FORMATS)}")
    if "json" in config.formats and not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty when json output is enabled")
