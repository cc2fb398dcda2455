"""Output renderers for command results.

Provides abstraction and implementations for writing search results to
various output formats (console, JSON).
"""

from __future__ import annotations

from MibigSearch.config import AppConfig
from MibigSearch.renderers.base import MultiOutputWriter, OutputWriter
from MibigSearch.renderers.console import ConsoleOutputWriter, render_query, render_text
from MibigSearch.renderers.json import JsonFileWriter, render_entries, render_result


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no output format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_entries",
    "render_query",
    "render_result",
    "render_text",
    "create_output_writer",
]
