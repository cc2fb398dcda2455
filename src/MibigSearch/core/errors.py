"""Error types raised by the query evaluation core."""

from __future__ import annotations


class SearchError(Exception):
    """Base class for catalogue search failures."""


class InvalidCategoryError(SearchError, ValueError):
    """A term matches no known category, or a category is outside the closed set.

    This is the only error meant to be shown to end users as a bad request.
    """

    def __init__(self, value: str, message: str = "invalid search category") -> None:
        super().__init__(f"{message}: {value!r}")
        self.value = value


class CatalogueConfigurationError(SearchError):
    """Type hierarchy metadata is malformed (cycles, dangling parents, duplicate ids)."""


class StoreUnavailableError(SearchError):
    """The catalogue store cannot serve requests (e.g. already closed)."""


class EvaluationCancelled(SearchError):
    """Evaluation was cancelled or ran past its deadline."""
