"""In-memory closure index over the biosynthetic type tree."""

from __future__ import annotations

import threading
from collections import deque
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence

from MibigSearch.core.errors import CatalogueConfigurationError
from MibigSearch.core.models import TypeNode
from MibigSearch.utils.log import log


class TypeHierarchyIndex:
    """Immutable parent -> children adjacency over a forest of type nodes.

    Built once from the full node list. Construction fails with
    ``CatalogueConfigurationError`` on duplicate ids, parents that do not
    exist, or cycles, so lookups never have to guard against malformed data.
    Name lookups are case-insensitive.
    """

    __slots__ = ("_nodes", "_children", "_ids_by_name")

    def __init__(self, nodes: Iterable[TypeNode]) -> None:
        by_id: dict[int, TypeNode] = {}
        for node in nodes:
            if node.id in by_id:
                raise CatalogueConfigurationError(f"duplicate type node id: {node.id}")
            by_id[node.id] = node

        children: dict[int, list[int]] = {node_id: [] for node_id in by_id}
        roots: list[int] = []
        ids_by_name: dict[str, list[int]] = {}
        for node in by_id.values():
            ids_by_name.setdefault(node.name.casefold(), []).append(node.id)
            if node.parent_id is None:
                roots.append(node.id)
                continue
            if node.parent_id not in by_id:
                raise CatalogueConfigurationError(
                    f"type node {node.name!r} references missing parent id {node.parent_id}"
                )
            children[node.parent_id].append(node.id)

        # Every node has at most one parent, so anything unreachable from a
        # root sits on a cycle.
        reachable = _walk(roots, children)
        if len(reachable) != len(by_id):
            stuck = sorted(by_id[node_id].name for node_id in by_id.keys() - reachable)
            raise CatalogueConfigurationError(f"cycle in type hierarchy involving: {', '.join(stuck)}")

        self._nodes: Mapping[int, TypeNode] = MappingProxyType(by_id)
        self._children: Mapping[int, tuple[int, ...]] = MappingProxyType(
            {node_id: tuple(kids) for node_id, kids in children.items()}
        )
        self._ids_by_name: Mapping[str, tuple[int, ...]] = MappingProxyType(
            {name: tuple(ids) for name, ids in ids_by_name.items()}
        )

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, node_id: int) -> TypeNode:
        return self._nodes[node_id]

    def descendants_of(self, type_name: str) -> frozenset[int]:
        """Return the ids of the named node(s) plus every node below them.

        An unknown name yields an empty set.
        """
        start = self._ids_by_name.get(type_name.casefold(), ())
        if not start:
            return frozenset()
        return frozenset(_walk(start, self._children))


def _walk(start: Iterable[int], children: Mapping[int, Sequence[int]]) -> set[int]:
    seen: set[int] = set()
    queue = deque(start)
    while queue:
        node_id = queue.popleft()
        if node_id in seen:
            continue
        seen.add(node_id)
        queue.extend(children.get(node_id, ()))
    return seen


class TypeHierarchyHolder:
    """Process-wide reference to the current type hierarchy index.

    Readers take a snapshot through ``current``; ``reload`` builds a new index
    completely before swapping the reference, so a reader never observes a
    partially built index.
    """

    def __init__(self, loader: Callable[[], Sequence[TypeNode]]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._index: TypeHierarchyIndex | None = None

    @property
    def current(self) -> TypeHierarchyIndex:
        index = self._index
        if index is None:
            return self.reload()
        return index

    def reload(self) -> TypeHierarchyIndex:
        """Rebuild the index from the loader and swap it in.

        Raises:
            CatalogueConfigurationError: If the loaded hierarchy is malformed;
                the previous index stays in place.
        """
        with self._lock:
            index = TypeHierarchyIndex(self._loader())
            self._index = index
        log.info("Type hierarchy loaded: nodes=%d", len(index))
        return index
