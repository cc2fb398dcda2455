"""Query tree evaluation against the catalogue store."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from MibigSearch.core.cancel import CancelToken
from MibigSearch.core.categories import FIELD_CATEGORIES, Category
from MibigSearch.core.errors import EvaluationCancelled
from MibigSearch.core.query import Expression, Operation, Operator, QueryTerm
from MibigSearch.core.sets import difference, intersect, union
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.core.hierarchy import TypeHierarchyHolder, TypeHierarchyIndex
    from MibigSearch.services.resolver import CategoryResolver
    from MibigSearch.services.store import CatalogueStore

_COMBINERS: dict[Operator, Callable[[list[str], list[str]], list[str]]] = {
    Operator.AND: intersect,
    Operator.OR: union,
    Operator.EXCEPT: difference,
}


@dataclass(slots=True)
class QueryEvaluator:
    """Evaluate a query tree into an ordered list of record accessions.

    Expressions with an ``unknown`` category are resolved in place before
    lookup. ``type`` expressions match the named type and all its subtypes;
    every other category is an exact, case-insensitive field match.

    When ``parallel`` is enabled the two sides of each operation are
    evaluated concurrently. The first failure on either side cancels the
    shared token and is re-raised; no partial result is returned.

    Attributes:
        store: Catalogue store answering lookups.
        resolver: Category resolver for unqualified terms.
        hierarchy: Holder of the current type hierarchy index.
        parallel: Whether to evaluate sibling subtrees concurrently.
        max_workers: Worker threads used when ``parallel`` is enabled.
        timeout: Default deadline in seconds when no token is supplied.
    """

    store: CatalogueStore
    resolver: CategoryResolver
    hierarchy: TypeHierarchyHolder
    parallel: bool = False
    max_workers: int = 4
    timeout: float | None = None

    def evaluate(self, tree: QueryTerm, *, cancel: CancelToken | None = None) -> list[str]:
        """Evaluate ``tree`` and return the matching accessions.

        Args:
            tree: Query tree; unknown categories are resolved in place.
            cancel: Token carrying the caller's deadline. A fresh token using
                ``timeout`` is created when omitted.

        Raises:
            InvalidCategoryError: If a term cannot be assigned a category.
            EvaluationCancelled: If the token is cancelled or expires.
        """
        token = cancel if cancel is not None else CancelToken(self.timeout)
        index = self.hierarchy.current
        if self.parallel and isinstance(tree, Operation):
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                ids = self._evaluate(tree, index, token, executor)
        else:
            ids = self._evaluate(tree, index, token, None)
        log.info("Query evaluated: matches=%d", len(ids))
        return ids

    def _evaluate(
        self,
        node: QueryTerm,
        index: TypeHierarchyIndex,
        token: CancelToken,
        executor: ThreadPoolExecutor | None,
    ) -> list[str]:
        if isinstance(node, Expression):
            return self._evaluate_expression(node, index, token)
        if isinstance(node, Operation):
            return self._evaluate_operation(node, index, token, executor)
        raise TypeError(f"Unsupported query node: {type(node).__name__}")

    def _evaluate_expression(
        self,
        node: Expression,
        index: TypeHierarchyIndex,
        token: CancelToken,
    ) -> list[str]:
        if not node.resolved:
            node.resolve(self.resolver.resolve(node.term, cancel=token))

        if node.category is Category.TYPE:
            node_ids = index.descendants_of(node.term)
            if not node_ids:
                log.debug("No type node named %r", node.term)
                return []
            token.check()
            ids = list(self.store.ids_matching_type(node_ids))
        elif node.category in FIELD_CATEGORIES:
            token.check()
            ids = list(self.store.ids_matching_field(node.category, node.term))
        else:
            ids = []

        log.debug("Expression %s:%r matched %d", node.category, node.term, len(ids))
        return ids

    def _evaluate_operation(
        self,
        node: Operation,
        index: TypeHierarchyIndex,
        token: CancelToken,
        executor: ThreadPoolExecutor | None,
    ) -> list[str]:
        combine = _COMBINERS.get(node.operator)
        if combine is None:
            raise ValueError(f"Unsupported operation: {node.operator}")

        if executor is None:
            left = self._evaluate(node.left, index, token, None)
            right = self._evaluate(node.right, index, token, None)
            return combine(left, right)

        future = executor.submit(self._evaluate, node.right, index, token, executor)
        future.add_done_callback(lambda done: _cancel_on_failure(done, token))
        try:
            left = self._evaluate(node.left, index, token, executor)
        except EvaluationCancelled:
            # The sibling may still be running after it cancelled the token;
            # its own error takes precedence over the cancellation it caused.
            if not future.cancel():
                wait([future])
            sibling_error = _failure_of(future)
            if sibling_error is not None:
                raise sibling_error from None
            raise
        except BaseException:
            token.cancel()
            future.cancel()
            raise

        # A subtree still waiting in the queue runs inline, so a worker never
        # blocks on work that has not started.
        if future.cancel():
            right = self._evaluate(node.right, index, token, executor)
        else:
            right = future.result()
        return combine(left, right)


def _cancel_on_failure(future: Future, token: CancelToken) -> None:
    if not future.cancelled() and future.exception() is not None:
        token.cancel()


def _failure_of(future: Future) -> BaseException | None:
    if future.cancelled() or not future.done():
        return None
    error = future.exception()
    if isinstance(error, EvaluationCancelled):
        return None
    return error
