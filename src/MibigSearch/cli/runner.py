"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

from typing import Callable

import click

from MibigSearch.config import AppConfig
from MibigSearch.core.errors import InvalidCategoryError
from MibigSearch.services import CatalogueSearchService, create_search_service
from MibigSearch.storage import create_storage
from MibigSearch.utils.log import configure_logging, log, trace_sql


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, action: str, body: Callable[[CatalogueSearchService], None]) -> None:
        """Configure logging, open the catalogue and run ``body``.

        Args:
            action: The CLI command name (e.g., 'search').
            body: Command body receiving the search service.

        Raises:
            click.UsageError: When a query term or category is invalid.
            click.Abort: When the command fails for any other reason.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            db_manager, store = create_storage(self.config)
            with db_manager:
                if self.config.runtime.trace_sql:
                    trace_sql(db_manager.get_connection())
                body(create_search_service(self.config, store))
        except InvalidCategoryError as e:
            log.error("%s failed: %s", action, e)
            raise click.UsageError(str(e)) from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
