"""Search service layer exposed to the transport and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from MibigSearch.core.cancel import CancelToken
from MibigSearch.core.categories import Category
from MibigSearch.core.hierarchy import TypeHierarchyHolder
from MibigSearch.core.models import (
    AvailableTerm,
    CatalogueCounts,
    GenusStat,
    RepositoryEntry,
    ResultStats,
    SearchResult,
    TypeStat,
)
from MibigSearch.core.query import QueryTerm
from MibigSearch.services.assembler import ResultAssembler
from MibigSearch.services.autocomplete import AutocompleteProvider
from MibigSearch.services.evaluator import QueryEvaluator
from MibigSearch.services.resolver import CategoryResolver
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.services.store import CatalogueStore


@dataclass(slots=True)
class CatalogueSearchService:
    """Application service wiring the evaluator, assembler and autocomplete."""

    store: CatalogueStore
    resolver: CategoryResolver
    evaluator: QueryEvaluator
    assembler: ResultAssembler
    autocomplete: AutocompleteProvider

    @classmethod
    def from_store(
        cls,
        store: CatalogueStore,
        *,
        hierarchy: TypeHierarchyHolder | None = None,
        parallel: bool = False,
        max_workers: int = 4,
        timeout: float | None = None,
    ) -> CatalogueSearchService:
        """Create a service whose components all share ``store``.

        Args:
            store: Catalogue store.
            hierarchy: Type hierarchy holder; built from the store when omitted.
            parallel: Evaluate sibling subtrees concurrently.
            max_workers: Worker threads for parallel evaluation.
            timeout: Default evaluation deadline in seconds.

        Returns:
            Configured CatalogueSearchService instance.
        """
        resolver = CategoryResolver(store)
        return cls(
            store=store,
            resolver=resolver,
            evaluator=QueryEvaluator(
                store=store,
                resolver=resolver,
                hierarchy=hierarchy or TypeHierarchyHolder(store.load_type_hierarchy),
                parallel=parallel,
                max_workers=max_workers,
                timeout=timeout,
            ),
            assembler=ResultAssembler(store),
            autocomplete=AutocompleteProvider(store),
        )

    def evaluate(self, tree: QueryTerm, *, cancel: CancelToken | None = None) -> list[str]:
        return self.evaluator.evaluate(tree, cancel=cancel)

    def resolve_categories_in_place(self, tree: QueryTerm, *, cancel: CancelToken | None = None) -> QueryTerm:
        """Resolve unknown categories of ``tree`` without evaluating it."""
        return self.resolver.resolve_in_place(tree, cancel=cancel)

    def assemble(self, ids: Sequence[str]) -> list[RepositoryEntry]:
        return self.assembler.assemble(ids)

    def stats(self, ids: Sequence[str]) -> ResultStats:
        return self.assembler.stats(ids)

    def available(self, category: str | Category, prefix: str) -> list[AvailableTerm]:
        return self.autocomplete.available(category, prefix)

    def search(self, tree: QueryTerm, *, cancel: CancelToken | None = None) -> SearchResult:
        """Evaluate ``tree`` and assemble the full result payload."""
        ids = self.evaluate(tree, cancel=cancel)
        entries = self.assemble(ids)
        stats = self.stats(ids)
        log.info("Search completed: total=%d entries=%d", len(ids), len(entries))
        return SearchResult(total=len(ids), entries=entries, stats=stats)

    def reload_hierarchy(self) -> None:
        """Rebuild the type hierarchy index after catalogue metadata changes."""
        self.evaluator.hierarchy.reload()

    def repository(self) -> list[RepositoryEntry]:
        """Return display records for the whole catalogue."""
        return self.assemble(self.store.all_ids())

    def counts(self) -> CatalogueCounts:
        return self.store.catalogue_counts()

    def type_stats(self) -> list[TypeStat]:
        return self.store.type_stats()

    def genus_stats(self) -> list[GenusStat]:
        return self.store.genus_stats()
