"""Projection of matching accessions into display records and statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from MibigSearch.core.models import RawEntryRow, RepositoryEntry, ResultStats
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.services.store import CatalogueStore


@dataclass(slots=True)
class ResultAssembler:
    """Build display-ready entries and aggregate breakdowns from accessions."""

    store: CatalogueStore

    def assemble(self, ids: Sequence[str]) -> list[RepositoryEntry]:
        """Fetch and project display records for ``ids``.

        Records come back in the store's order. Type tags are sorted by
        ``(css_class, name)``; products keep the store's multiplicity.

        Args:
            ids: Record accessions, usually produced by the evaluator.

        Returns:
            One entry per known accession.
        """
        if not ids:
            return []
        rows = self.store.fetch_display_records(list(ids))
        entries = [_to_entry(row) for row in rows]
        log.debug("Assembled %d entries for %d ids", len(entries), len(ids))
        return entries

    def stats(self, ids: Sequence[str]) -> ResultStats:
        """Count ``ids`` per type name and per phylum.

        Label order is not significant.
        """
        if not ids:
            return ResultStats()
        id_list = list(ids)
        return ResultStats(
            by_type=self.store.aggregate_by_type(id_list),
            by_phylum=self.store.aggregate_by_phylum(id_list),
        )


def _to_entry(row: RawEntryRow) -> RepositoryEntry:
    return RepositoryEntry(
        accession=row.accession,
        quality=row.quality,
        completeness=row.completeness,
        status=row.status,
        minimal=row.minimal,
        products=tuple(row.products),
        tags=tuple(sorted(row.tags, key=lambda tag: (tag.css_class, tag.name))),
        organism=row.organism,
    )
