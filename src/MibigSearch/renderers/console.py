"""Console text output renderers.

Renders assembled catalogue entries into human-friendly text and logs it.
"""

from __future__ import annotations

from typing import Iterable

from MibigSearch.core.models import RepositoryEntry, ResultStats, SearchResult
from MibigSearch.core.query import Expression, Operation, QueryTerm
from MibigSearch.renderers.base import OutputWriter
from MibigSearch.utils.log import log


def render_query(node: QueryTerm) -> str:
    """Render a query tree as an infix string, e.g. ``(genus:"A" EXCEPT species:"b")``."""
    if isinstance(node, Expression):
        return f'{node.category}:"{node.term}"'
    if isinstance(node, Operation):
        return f"({render_query(node.left)} {node.operator} {render_query(node.right)})"
    raise TypeError(f"Unsupported query node: {type(node).__name__}")


def render_text(entries: Iterable[RepositoryEntry]) -> str:
    """Render entries into a human-readable text block."""
    lines: list[str] = []
    for idx, entry in enumerate(entries, start=1):
        flags = [flag for flag in (entry.status, entry.quality, entry.completeness) if flag]
        if entry.minimal:
            flags.append("minimal")
        lines.append(f"{idx}. {entry.accession}  [{', '.join(flags) or '-'}]")
        lines.append(f"   Organism: {entry.organism or '-'}")
        if entry.tags:
            lines.append("   Types: " + ", ".join(f"{tag.name} ({tag.css_class})" for tag in entry.tags))
        for product in entry.products:
            if product.synonyms:
                lines.append(f"   Product: {product.name} (aka {', '.join(product.synonyms)})")
            else:
                lines.append(f"   Product: {product.name}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_stats(stats: ResultStats) -> str:
    lines = ["By type:"]
    lines.extend(f"   {label}: {count}" for label, count in zip(stats.by_type.labels, stats.by_type.counts))
    lines.append("By phylum:")
    lines.extend(f"   {label}: {count}" for label, count in zip(stats.by_phylum.labels, stats.by_phylum.counts))
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_search_result(self, result: SearchResult, query: QueryTerm) -> None:
        log.info("query=%s", render_query(query))
        log.info("Total matches: %d", result.total)
        for line in render_text(result.entries).splitlines():
            log.info(line)
        for line in render_stats(result.stats).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
