"""Lookup and aggregation primitives required from the persistence layer."""

from __future__ import annotations

from typing import AbstractSet, Protocol, Sequence

from MibigSearch.core.categories import Category
from MibigSearch.core.models import (
    AvailableTerm,
    CatalogueCounts,
    GenusStat,
    LabelsAndCounts,
    RawEntryRow,
    TypeNode,
    TypeStat,
)


class CatalogueStore(Protocol):
    """Read-only catalogue store consumed by the query evaluation core.

    Implementations raise their own I/O errors; the core never wraps them.
    """

    def count_matches(self, category: Category, term: str) -> int:
        """Count catalogue values of ``category`` equal to ``term`` (case-insensitive)."""
        raise NotImplementedError

    def ids_matching_type(self, node_ids: AbstractSet[int]) -> list[str]:
        """Return distinct accessions tagged with any of ``node_ids``."""
        raise NotImplementedError

    def ids_matching_field(self, category: Category, term: str) -> list[str]:
        """Return distinct accessions whose ``category`` field equals ``term``.

        Matching is exact and case-insensitive. Categories without a
        backing field yield an empty list.
        """
        raise NotImplementedError

    def values_matching_prefix(self, category: Category, prefix: str) -> list[AvailableTerm]:
        """Return distinct values of ``category`` starting with ``prefix``.

        For ``Category.TYPE`` the name or the description may match, and
        results are ordered by name.
        """
        raise NotImplementedError

    def fetch_display_records(self, ids: Sequence[str]) -> list[RawEntryRow]:
        """Return display data for ``ids`` in one batched call."""
        raise NotImplementedError

    def aggregate_by_type(self, ids: Sequence[str]) -> LabelsAndCounts:
        raise NotImplementedError

    def aggregate_by_phylum(self, ids: Sequence[str]) -> LabelsAndCounts:
        raise NotImplementedError

    def load_type_hierarchy(self) -> list[TypeNode]:
        raise NotImplementedError

    def all_ids(self) -> list[str]:
        raise NotImplementedError

    def catalogue_counts(self) -> CatalogueCounts:
        raise NotImplementedError

    def type_stats(self) -> list[TypeStat]:
        raise NotImplementedError

    def genus_stats(self) -> list[GenusStat]:
        raise NotImplementedError
