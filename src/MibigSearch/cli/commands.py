"""Command implementations for the MibigSearch CLI.

Encapsulates business logic for each command, separated from CLI
parameter handling and output formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable

from MibigSearch.core.query import QueryTerm, query_to_dict
from MibigSearch.renderers import OutputWriter
from MibigSearch.services.search import CatalogueSearchService
from MibigSearch.utils.log import log

Emit = Callable[[str], None]


@dataclass(slots=True)
class SearchCommand:
    """Evaluate a query and hand the assembled result to the output writer."""

    search_service: CatalogueSearchService
    output_writer: OutputWriter

    def execute(self, query: QueryTerm) -> None:
        result = self.search_service.search(query)
        self.output_writer.write_search_result(result, query)


@dataclass(slots=True)
class ConvertCommand:
    """Resolve unknown categories of a query and emit the tree as JSON."""

    search_service: CatalogueSearchService
    emit: Emit

    def execute(self, query: QueryTerm) -> None:
        resolved = self.search_service.resolve_categories_in_place(query)
        self.emit(json.dumps({"terms": query_to_dict(resolved)}, ensure_ascii=False, indent=2))


@dataclass(slots=True)
class AvailableCommand:
    """Emit autocomplete suggestions as JSON."""

    search_service: CatalogueSearchService
    emit: Emit

    def execute(self, category: str, prefix: str) -> None:
        terms = self.search_service.available(category, prefix)
        log.debug("Autocomplete category=%s prefix=%r suggestions=%d", category, prefix, len(terms))
        payload = [{"val": term.value, "desc": term.description} for term in terms]
        self.emit(json.dumps(payload, ensure_ascii=False, indent=2))


@dataclass(slots=True)
class OverviewCommand:
    """Log catalogue-wide counts and breakdowns."""

    search_service: CatalogueSearchService

    def execute(self) -> None:
        counts = self.search_service.counts()
        log.info(
            "Entries: total=%d complete=%d incomplete=%d minimal=%d",
            counts.total,
            counts.complete,
            counts.incomplete,
            counts.minimal,
        )
        log.info("--- Types ---")
        for stat in self.search_service.type_stats():
            log.info("%s (%s): %d", stat.type, stat.description, stat.count)
        log.info("--- Genera ---")
        for stat in self.search_service.genus_stats():
            log.info("%s: %d", stat.genus, stat.count)
