"""Tests for the in-memory type hierarchy closure."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MibigSearch.core.errors import CatalogueConfigurationError
from MibigSearch.core.hierarchy import TypeHierarchyHolder, TypeHierarchyIndex
from MibigSearch.core.models import TypeNode


def _forest() -> list[TypeNode]:
    return [
        TypeNode(1, "polyketide", "Polyketide", "pks"),
        TypeNode(2, "t1pks", "Type I polyketide", "pks", parent_id=1),
        TypeNode(3, "transatpks", "Trans-AT type I polyketide", "pks", parent_id=2),
        TypeNode(4, "t2pks", "Type II polyketide", "pks", parent_id=1),
        TypeNode(5, "nrps", "NRP", "nrps"),
        TypeNode(6, "ripp", "RiPP", "ripp"),
        TypeNode(7, "lanthipeptide", "Lanthipeptide", "ripp", parent_id=6),
    ]


class TestTypeHierarchyIndex(unittest.TestCase):
    def test_descendants_include_node_and_subtree(self) -> None:
        index = TypeHierarchyIndex(_forest())
        self.assertEqual(index.descendants_of("polyketide"), {1, 2, 3, 4})

    def test_descendants_exclude_other_components(self) -> None:
        index = TypeHierarchyIndex(_forest())
        self.assertEqual(index.descendants_of("t1pks"), {2, 3})
        self.assertEqual(index.descendants_of("ripp"), {6, 7})

    def test_leaf_returns_itself(self) -> None:
        index = TypeHierarchyIndex(_forest())
        self.assertEqual(index.descendants_of("transatpks"), {3})

    def test_name_lookup_is_case_insensitive(self) -> None:
        index = TypeHierarchyIndex(_forest())
        self.assertEqual(index.descendants_of("NRPS"), {5})

    def test_unknown_name_is_empty(self) -> None:
        index = TypeHierarchyIndex(_forest())
        self.assertEqual(index.descendants_of("saccharide"), frozenset())

    def test_cycle_is_configuration_error(self) -> None:
        nodes = [
            TypeNode(1, "root", "", "x"),
            TypeNode(2, "a", "", "x", parent_id=3),
            TypeNode(3, "b", "", "x", parent_id=2),
        ]
        with self.assertRaisesRegex(CatalogueConfigurationError, "cycle"):
            TypeHierarchyIndex(nodes)

    def test_self_parent_is_configuration_error(self) -> None:
        with self.assertRaises(CatalogueConfigurationError):
            TypeHierarchyIndex([TypeNode(1, "loop", "", "x", parent_id=1)])

    def test_missing_parent_is_configuration_error(self) -> None:
        with self.assertRaisesRegex(CatalogueConfigurationError, "missing parent"):
            TypeHierarchyIndex([TypeNode(1, "orphan", "", "x", parent_id=99)])

    def test_duplicate_id_is_configuration_error(self) -> None:
        with self.assertRaisesRegex(CatalogueConfigurationError, "duplicate"):
            TypeHierarchyIndex([TypeNode(1, "a", "", "x"), TypeNode(1, "b", "", "x")])

    def test_empty_hierarchy(self) -> None:
        index = TypeHierarchyIndex([])
        self.assertEqual(len(index), 0)
        self.assertEqual(index.descendants_of("anything"), frozenset())


class TestTypeHierarchyHolder(unittest.TestCase):
    def test_loads_lazily_once(self) -> None:
        calls: list[int] = []

        def loader() -> list[TypeNode]:
            calls.append(1)
            return _forest()

        holder = TypeHierarchyHolder(loader)
        self.assertEqual(calls, [])
        first = holder.current
        second = holder.current
        self.assertIs(first, second)
        self.assertEqual(len(calls), 1)

    def test_reload_swaps_whole_index(self) -> None:
        nodes = _forest()
        holder = TypeHierarchyHolder(lambda: list(nodes))
        before = holder.current
        nodes.append(TypeNode(8, "lassopeptide", "Lasso peptide", "ripp", parent_id=6))

        after = holder.reload()

        self.assertIsNot(before, after)
        self.assertIs(holder.current, after)
        self.assertEqual(before.descendants_of("ripp"), {6, 7})
        self.assertEqual(after.descendants_of("ripp"), {6, 7, 8})

    def test_failed_reload_keeps_previous_index(self) -> None:
        nodes = _forest()
        holder = TypeHierarchyHolder(lambda: list(nodes))
        before = holder.current
        nodes.append(TypeNode(9, "broken", "", "x", parent_id=42))

        with self.assertRaises(CatalogueConfigurationError):
            holder.reload()

        self.assertIs(holder.current, before)


if __name__ == "__main__":
    unittest.main()
