"""Base classes for output writers.

Provides abstraction for writing search results to console or files.
Separates control flow from output logic for better testability.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from MibigSearch.core.models import SearchResult
from MibigSearch.core.query import QueryTerm


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_search_result(self, result: SearchResult, query: QueryTerm) -> None:
        """Write the result of one evaluated query.

        Args:
            result: Assembled entries and statistics.
            query: The query tree, with categories resolved.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_search_result(self, result: SearchResult, query: QueryTerm) -> None:
        for writer in self.writers:
            writer.write_search_result(result, query)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
