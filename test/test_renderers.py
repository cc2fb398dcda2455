"""Tests for console and JSON result renderers."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MibigSearch.core.categories import Category
from MibigSearch.core.models import (
    LabelsAndCounts,
    Product,
    ProductTag,
    RepositoryEntry,
    ResultStats,
    SearchResult,
)
from MibigSearch.core.query import Expression, Operation, Operator
from MibigSearch.renderers.console import render_query, render_text
from MibigSearch.renderers.json import JsonFileWriter, render_entries, render_result


def _entry() -> RepositoryEntry:
    return RepositoryEntry(
        accession="BGC0000002",
        quality="high",
        completeness="complete",
        status="active",
        minimal=False,
        products=(Product("kirromycin", ("mocimycin",)), Product("aurodox")),
        tags=(ProductTag("NRP", "nrps"), ProductTag("Trans-AT type I polyketide", "pks")),
        organism="Streptomyces collinus Tu 365",
    )


def _query() -> Operation:
    return Operation(
        Operator.EXCEPT,
        Expression("Streptomyces", Category.GENUS),
        Expression("coelicolor", Category.SPECIES),
    )


class TestConsoleRenderers(unittest.TestCase):
    def test_render_query_infix(self) -> None:
        self.assertEqual(render_query(_query()), '(genus:"Streptomyces" EXCEPT species:"coelicolor")')

    def test_render_text_lists_products_and_types(self) -> None:
        text = render_text([_entry()])
        self.assertIn("1. BGC0000002", text)
        self.assertIn("Organism: Streptomyces collinus Tu 365", text)
        self.assertIn("Types: NRP (nrps), Trans-AT type I polyketide (pks)", text)
        self.assertIn("Product: kirromycin (aka mocimycin)", text)
        self.assertIn("Product: aurodox\n", text)


class TestJsonRenderers(unittest.TestCase):
    def test_entry_field_names(self) -> None:
        (payload,) = render_entries([_entry()])
        self.assertEqual(
            set(payload),
            {"accession", "quality", "completeness", "status", "minimal", "products", "classes", "organism"},
        )
        self.assertEqual(payload["products"], [{"name": "kirromycin", "synonyms": ["mocimycin"]}, {"name": "aurodox"}])
        self.assertEqual(payload["classes"][0], {"name": "NRP", "css_class": "nrps"})

    def test_result_carries_query_and_stats(self) -> None:
        result = SearchResult(
            total=1,
            entries=[_entry()],
            stats=ResultStats(
                by_type=LabelsAndCounts(("nrps", "transatpks"), (1, 1)),
                by_phylum=LabelsAndCounts(("Actinomycetota",), (1,)),
            ),
        )
        payload = render_result(result, _query())
        self.assertEqual(payload["total"], 1)
        self.assertEqual(payload["query"]["terms"]["operation"], "EXCEPT")
        self.assertEqual(payload["stats"]["clusters_by_type"], {"labels": ["nrps", "transatpks"], "data": [1, 1]})
        self.assertEqual(payload["stats"]["clusters_by_phylum"], {"labels": ["Actinomycetota"], "data": [1]})

    def test_file_writer_finalize(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            writer = JsonFileWriter(temp_dir)
            writer.write_search_result(SearchResult(total=0, entries=[], stats=ResultStats()), _query())
            writer.finalize("search")

            files = list((Path(temp_dir) / "json").glob("search_*.json"))
            self.assertEqual(len(files), 1)
            saved = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(saved[0]["total"], 0)
        self.assertEqual(saved[0]["clusters"], [])


if __name__ == "__main__":
    unittest.main()
