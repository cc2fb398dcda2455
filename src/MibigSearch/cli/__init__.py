"""CLI package for MibigSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from MibigSearch.cli.runner import CommandRunner
from MibigSearch.cli.ui import cli


def main() -> None:
    """Run the MibigSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
