from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from MibigSearch.core.categories import Category


class Operator(str, Enum):
    """Boolean operator joining two sub-queries."""

    AND = "AND"
    OR = "OR"
    EXCEPT = "EXCEPT"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Operator) -> Operator:
        if isinstance(value, Operator):
            return value
        if not isinstance(value, str):
            raise TypeError("operation must be a string")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported operation: {value!r}") from None


@dataclass(slots=True, eq=True)
class Expression:
    """Leaf query node pairing a category with a literal term.

    The node is immutable except for its category, which may be resolved
    exactly once from ``Category.UNKNOWN`` to a concrete category. Each node
    belongs to a single subtree, so resolving it in place is safe while
    sibling subtrees are evaluated concurrently.

    Attributes:
        term: Literal term to match.
        category: Category the term belongs to, or ``Category.UNKNOWN``.
    """

    term: str
    category: Category = Category.UNKNOWN

    def __post_init__(self) -> None:
        self.category = Category.parse(self.category)

    @property
    def resolved(self) -> bool:
        return self.category is not Category.UNKNOWN

    def resolve(self, category: Category) -> None:
        """Record the resolved category of an ``unknown`` expression.

        Re-resolving to the same category is a no-op.

        Raises:
            ValueError: If the node already carries a different category,
                or ``category`` is itself unknown.
        """
        if category is Category.UNKNOWN:
            raise ValueError("cannot resolve an expression to the unknown category")
        if self.category is category:
            return
        if self.resolved:
            raise ValueError(
                f"expression {self.term!r} is already resolved to {self.category}"
            )
        self.category = category


@dataclass(frozen=True, slots=True)
class Operation:
    """Internal query node combining two sub-queries."""

    operator: Operator
    left: QueryTerm
    right: QueryTerm


QueryTerm = Union[Expression, Operation]


def iter_expressions(node: QueryTerm):
    """Yield every expression leaf of a query tree, left to right."""
    stack: list[QueryTerm] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Expression):
            yield current
        elif isinstance(current, Operation):
            stack.append(current.right)
            stack.append(current.left)
        else:
            raise TypeError(f"Unsupported query node: {type(current).__name__}")


def query_from_dict(raw: Mapping[str, Any]) -> QueryTerm:
    """Build a query tree from its JSON-compatible mapping form.

    Accepts either a bare node or a ``{"terms": node}`` wrapper. Nodes use
    ``term_type`` ``"expr"`` (``category``, ``term``) or ``"op"``
    (``operation``, ``left``, ``right``).

    Raises:
        TypeError: If a node or field has the wrong type.
        ValueError: If required keys are missing or the node kind is unknown.
        InvalidCategoryError: If an explicit category is not recognized.
    """
    if not isinstance(raw, Mapping):
        raise TypeError("query node must be an object")
    if "terms" in raw and "term_type" not in raw:
        return query_from_dict(raw["terms"])

    term_type = raw.get("term_type")
    if term_type == "expr":
        term = raw.get("term")
        if not isinstance(term, str):
            raise TypeError("expr.term must be a string")
        category = raw.get("category") or Category.UNKNOWN
        return Expression(term=term, category=Category.parse(category))
    if term_type == "op":
        for key in ("operation", "left", "right"):
            if key not in raw:
                raise ValueError(f"Missing required key: op.{key}")
        return Operation(
            operator=Operator.parse(raw["operation"]),
            left=query_from_dict(raw["left"]),
            right=query_from_dict(raw["right"]),
        )
    raise ValueError(f"Unsupported term_type: {term_type!r}")


def query_to_dict(node: QueryTerm) -> dict[str, Any]:
    """Serialize a query tree into its JSON-compatible mapping form."""
    if isinstance(node, Expression):
        return {"term_type": "expr", "category": node.category.value, "term": node.term}
    if isinstance(node, Operation):
        return {
            "term_type": "op",
            "operation": node.operator.value,
            "left": query_to_dict(node.left),
            "right": query_to_dict(node.right),
        }
    raise TypeError(f"Unsupported query node: {type(node).__name__}")
