"""Heuristic category inference for unqualified search terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from MibigSearch.core.cancel import CancelToken
from MibigSearch.core.categories import RESOLUTION_ORDER, Category
from MibigSearch.core.errors import InvalidCategoryError
from MibigSearch.core.query import QueryTerm, iter_expressions
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.services.store import CatalogueStore


@dataclass(slots=True)
class CategoryResolver:
    """Assign a category to a term by probing the store in priority order.

    The first category whose membership count is positive wins, so the
    probe order decides ties between categories.
    """

    store: CatalogueStore
    order: Sequence[Category] = RESOLUTION_ORDER

    def resolve(self, term: str, *, cancel: CancelToken | None = None) -> Category:
        """Return the category of ``term``.

        Args:
            term: Unqualified search term.
            cancel: Optional token checked before every store probe.

        Raises:
            InvalidCategoryError: If no category has a positive count.
            EvaluationCancelled: If the token is cancelled or expired.
        """
        for category in self.order:
            if cancel is not None:
                cancel.check()
            if self.store.count_matches(category, term) > 0:
                log.debug("Resolved term=%r category=%s", term, category)
                return category
        raise InvalidCategoryError(term)

    def resolve_in_place(self, tree: QueryTerm, *, cancel: CancelToken | None = None) -> QueryTerm:
        """Resolve every ``unknown`` expression of ``tree`` and return the tree.

        Stops at the first term that cannot be resolved.
        """
        for expression in iter_expressions(tree):
            if not expression.resolved:
                expression.resolve(self.resolve(expression.term, cancel=cancel))
        return tree
