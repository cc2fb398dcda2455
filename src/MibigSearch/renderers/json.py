"""JSON output renderers.

Renders search results into JSON-serializable objects using the catalogue
API field names, and writes them to a file on finalize.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from MibigSearch.core.models import LabelsAndCounts, RepositoryEntry, ResultStats, SearchResult
from MibigSearch.core.query import QueryTerm, query_to_dict
from MibigSearch.renderers.base import OutputWriter
from MibigSearch.utils.log import log


def render_entries(entries: Iterable[RepositoryEntry]) -> list[dict[str, Any]]:
    """Render entries into JSON-serializable dicts."""
    out: list[dict[str, Any]] = []
    for entry in entries:
        products: list[dict[str, Any]] = []
        for product in entry.products:
            item: dict[str, Any] = {"name": product.name}
            # Empty synonym lists are omitted.
            if product.synonyms:
                item["synonyms"] = list(product.synonyms)
            products.append(item)
        out.append(
            {
                "accession": entry.accession,
                "quality": entry.quality,
                "completeness": entry.completeness,
                "status": entry.status,
                "minimal": entry.minimal,
                "products": products,
                "classes": [{"name": tag.name, "css_class": tag.css_class} for tag in entry.tags],
                "organism": entry.organism,
            }
        )
    return out


def _labels_payload(pairs: LabelsAndCounts) -> dict[str, list]:
    return {"labels": list(pairs.labels), "data": list(pairs.counts)}


def render_stats(stats: ResultStats) -> dict[str, Any]:
    return {
        "clusters_by_type": _labels_payload(stats.by_type),
        "clusters_by_phylum": _labels_payload(stats.by_phylum),
    }


def render_result(result: SearchResult, query: QueryTerm) -> dict[str, Any]:
    return {
        "query": {"terms": query_to_dict(query)},
        "total": result.total,
        "clusters": render_entries(result.entries),
        "stats": render_stats(result.stats),
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_search_result(self, result: SearchResult, query: QueryTerm) -> None:
        self.all_results.append(render_result(result, query))

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
