"""Set algebra over ordered record identifier lists.

``intersect`` and ``difference`` keep the order of their left operand.
``union`` has no primary side, so its result is sorted ascending.
"""

from __future__ import annotations

from typing import Hashable, Sequence, TypeVar

T = TypeVar("T", bound=Hashable)


def intersect(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Return the elements of ``a`` that also occur in ``b``, in ``a``'s order."""
    members = set(b)
    return [item for item in a if item in members]


def union(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Return the deduplicated union of ``a`` and ``b`` sorted ascending."""
    return sorted(set(a).union(b))


def difference(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Return the elements of ``a`` absent from ``b``, in ``a``'s order."""
    excluded = set(b)
    return [item for item in a if item not in excluded]
