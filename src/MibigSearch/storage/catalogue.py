"""SQLite implementation of the catalogue store."""

from __future__ import annotations

import json
from collections import defaultdict
from typing import TYPE_CHECKING, AbstractSet, Any, Final, Sequence

from MibigSearch.core.categories import Category
from MibigSearch.core.models import (
    AvailableTerm,
    CatalogueCounts,
    GenusStat,
    LabelsAndCounts,
    Product,
    ProductTag,
    RawEntryRow,
    TypeNode,
    TypeStat,
)
from MibigSearch.utils.log import log

if TYPE_CHECKING:
    from MibigSearch.storage.db import DatabaseManager

# Taxonomy categories and the taxa column backing each.
_TAXON_COLUMNS: Final[dict[Category, str]] = {
    Category.SUPERKINGDOM: "superkingdom",
    Category.KINGDOM: "kingdom",
    Category.PHYLUM: "phylum",
    Category.CLASS: "class",
    Category.ORDER: "taxonomic_order",
    Category.FAMILY: "family",
    Category.GENUS: "genus",
    Category.SPECIES: "species",
}

# Exact, case-insensitive field lookups. Each statement takes one parameter.
_IDS_BY_FIELD: Final[dict[Category, str]] = {
    Category.ACCESSION: "SELECT accession FROM entries WHERE lower(accession) = lower(?) ORDER BY accession",
    Category.COMPOUND: (
        "SELECT DISTINCT accession FROM compounds WHERE lower(name) = lower(?) ORDER BY accession"
    ),
    Category.COMPLETENESS: (
        "SELECT accession FROM entries WHERE lower(completeness) = lower(?) ORDER BY accession"
    ),
    Category.MINIMAL: "SELECT accession FROM entries WHERE minimal = ? ORDER BY accession",
    Category.NCBI_LOCUS: (
        "SELECT DISTINCT accession FROM loci WHERE lower(locus_accession) = lower(?) ORDER BY accession"
    ),
    **{
        category: (
            "SELECT e.accession FROM entries e JOIN taxa t USING (tax_id) "
            f"WHERE lower(t.{column}) = lower(?) ORDER BY e.accession"
        )
        for category, column in _TAXON_COLUMNS.items()
    },
}

# Membership probes used by category resolution.
_COUNT_BY_CATEGORY: Final[dict[Category, str]] = {
    # casefold() is registered by ensure_db and matches the hierarchy index lookup.
    Category.TYPE: "SELECT COUNT(bgc_type_id) FROM bgc_types WHERE casefold(name) = casefold(?)",
    Category.ACCESSION: "SELECT COUNT(accession) FROM entries WHERE lower(accession) = lower(?)",
    Category.COMPOUND: "SELECT COUNT(compound_id) FROM compounds WHERE lower(name) = lower(?)",
    **{
        category: f"SELECT COUNT(tax_id) FROM taxa WHERE lower({column}) = lower(?)"
        for category, column in _TAXON_COLUMNS.items()
    },
}

# Prefix lookups for autocomplete; each returns (value, description).
_AVAILABLE_BY_CATEGORY: Final[dict[Category, str]] = {
    Category.TYPE: (
        "SELECT DISTINCT name, description FROM bgc_types "
        "WHERE name LIKE ? ESCAPE '\\' OR description LIKE ? ESCAPE '\\' ORDER BY name"
    ),
    Category.COMPOUND: (
        "SELECT DISTINCT name, name FROM compounds WHERE name LIKE ? ESCAPE '\\' ORDER BY name"
    ),
    Category.ACCESSION: (
        "SELECT accession, accession FROM entries WHERE accession LIKE ? ESCAPE '\\' ORDER BY accession"
    ),
    Category.COMPLETENESS: (
        "SELECT DISTINCT completeness, completeness FROM entries "
        "WHERE completeness LIKE ? ESCAPE '\\' ORDER BY completeness"
    ),
    Category.NCBI_LOCUS: (
        "SELECT DISTINCT locus_accession, locus_accession FROM loci "
        "WHERE locus_accession LIKE ? ESCAPE '\\' ORDER BY locus_accession"
    ),
    **{
        category: (
            f"SELECT DISTINCT {column}, {column} FROM taxa "
            f"WHERE {column} LIKE ? ESCAPE '\\' ORDER BY {column}"
        )
        for category, column in _TAXON_COLUMNS.items()
    },
}

_BOOLEAN_TERMS: Final[dict[str, int]] = {"true": 1, "yes": 1, "false": 0, "no": 0}

# Restricts a query to the accessions passed as one JSON array parameter.
_ID_FILTER: Final[str] = "IN (SELECT value FROM json_each(?))"


class SqliteCatalogueStore:
    """Read-only catalogue lookups over the SQLite schema.

    All statements run under the manager's lock, so one store can serve
    concurrently evaluated subtrees. sqlite errors propagate unchanged.
    """

    def __init__(self, db_manager: DatabaseManager):
        log.debug("Initializing SqliteCatalogueStore")
        self.db_manager = db_manager

    def _fetch(self, statement: str, params: Sequence[Any] = ()) -> list[tuple]:
        with self.db_manager.lock:
            conn = self.db_manager.get_connection()
            return conn.execute(statement, params).fetchall()

    def count_matches(self, category: Category, term: str) -> int:
        statement = _COUNT_BY_CATEGORY.get(category)
        if statement is None:
            return len(self.ids_matching_field(category, term))
        return int(self._fetch(statement, (term,))[0][0])

    def ids_matching_type(self, node_ids: AbstractSet[int]) -> list[str]:
        if not node_ids:
            return []
        rows = self._fetch(
            f"SELECT DISTINCT accession FROM rel_entries_types WHERE bgc_type_id {_ID_FILTER} ORDER BY accession",
            (json.dumps(sorted(node_ids)),),
        )
        return [row[0] for row in rows]

    def ids_matching_field(self, category: Category, term: str) -> list[str]:
        statement = _IDS_BY_FIELD.get(category)
        if statement is None:
            return []
        param: Any = term
        if category is Category.MINIMAL:
            param = _BOOLEAN_TERMS.get(term.strip().lower())
            if param is None:
                return []
        return [row[0] for row in self._fetch(statement, (param,))]

    def values_matching_prefix(self, category: Category, prefix: str) -> list[AvailableTerm]:
        statement = _AVAILABLE_BY_CATEGORY.get(category)
        if statement is None:
            return []
        pattern = _like_prefix(prefix)
        params = (pattern, pattern) if category is Category.TYPE else (pattern,)
        return [AvailableTerm(value=value, description=desc or value) for value, desc in self._fetch(statement, params)]

    def fetch_display_records(self, ids: Sequence[str]) -> list[RawEntryRow]:
        """Load entries, products and type tags for ``ids`` in one locked batch."""
        if not ids:
            return []
        id_param = (json.dumps(list(ids)),)
        with self.db_manager.lock:
            conn = self.db_manager.get_connection()
            entry_rows = conn.execute(
                "SELECT e.accession, e.quality, e.completeness, e.status, e.minimal, t.name "
                f"FROM entries e LEFT JOIN taxa t USING (tax_id) WHERE e.accession {_ID_FILTER} "
                "ORDER BY e.accession",
                id_param,
            ).fetchall()
            product_rows = conn.execute(
                f"SELECT accession, name, synonyms FROM compounds WHERE accession {_ID_FILTER} ORDER BY compound_id",
                id_param,
            ).fetchall()
            tag_rows = conn.execute(
                "SELECT r.accession, b.name, b.description, b.safe_class "
                "FROM rel_entries_types r JOIN bgc_types b USING (bgc_type_id) "
                f"WHERE r.accession {_ID_FILTER}",
                id_param,
            ).fetchall()

        products: dict[str, list[Product]] = defaultdict(list)
        for accession, name, synonyms in product_rows:
            products[accession].append(Product(name=name, synonyms=tuple(_parse_synonyms(synonyms))))

        tags: dict[str, list[ProductTag]] = defaultdict(list)
        for accession, name, description, safe_class in tag_rows:
            tags[accession].append(ProductTag(name=description or name, css_class=safe_class))

        return [
            RawEntryRow(
                accession=accession,
                quality=quality,
                completeness=completeness,
                status=status,
                minimal=bool(minimal),
                organism=organism,
                products=tuple(products.get(accession, ())),
                tags=tuple(tags.get(accession, ())),
            )
            for accession, quality, completeness, status, minimal, organism in entry_rows
        ]

    def aggregate_by_type(self, ids: Sequence[str]) -> LabelsAndCounts:
        return self._labels_and_counts(
            "SELECT b.name, COUNT(DISTINCT r.accession) FROM rel_entries_types r "
            f"JOIN bgc_types b USING (bgc_type_id) WHERE r.accession {_ID_FILTER} GROUP BY b.name",
            ids,
        )

    def aggregate_by_phylum(self, ids: Sequence[str]) -> LabelsAndCounts:
        return self._labels_and_counts(
            "SELECT t.phylum, COUNT(e.accession) FROM entries e JOIN taxa t USING (tax_id) "
            f"WHERE e.accession {_ID_FILTER} AND t.phylum IS NOT NULL GROUP BY t.phylum",
            ids,
        )

    def _labels_and_counts(self, statement: str, ids: Sequence[str]) -> LabelsAndCounts:
        if not ids:
            return LabelsAndCounts()
        rows = self._fetch(statement, (json.dumps(list(ids)),))
        return LabelsAndCounts(labels=tuple(row[0] for row in rows), counts=tuple(int(row[1]) for row in rows))

    def load_type_hierarchy(self) -> list[TypeNode]:
        rows = self._fetch(
            "SELECT bgc_type_id, name, description, safe_class, parent_id FROM bgc_types ORDER BY bgc_type_id"
        )
        return [
            TypeNode(id=node_id, name=name, description=description, display_class=safe_class, parent_id=parent_id)
            for node_id, name, description, safe_class, parent_id in rows
        ]

    def all_ids(self) -> list[str]:
        return [row[0] for row in self._fetch("SELECT accession FROM entries ORDER BY accession")]

    def catalogue_counts(self) -> CatalogueCounts:
        row = self._fetch(
            """
            SELECT
              COUNT(accession),
              COALESCE(SUM(lower(completeness) = 'complete'), 0),
              COALESCE(SUM(lower(completeness) = 'incomplete'), 0),
              COALESCE(SUM(minimal = 1), 0)
            FROM entries
            """
        )[0]
        return CatalogueCounts(total=row[0], complete=row[1], incomplete=row[2], minimal=row[3])

    def type_stats(self) -> list[TypeStat]:
        rows = self._fetch(
            """
            SELECT b.name, b.description, COUNT(DISTINCT r.accession) AS entry_count, b.safe_class
            FROM rel_entries_types r
            JOIN bgc_types b USING (bgc_type_id)
            GROUP BY b.bgc_type_id
            ORDER BY entry_count DESC, b.name
            """
        )
        return [TypeStat(type=name, description=desc, count=count, css_class=css) for name, desc, count, css in rows]

    def genus_stats(self) -> list[GenusStat]:
        rows = self._fetch(
            """
            SELECT t.genus, COUNT(e.accession) AS ct
            FROM entries e JOIN taxa t USING (tax_id)
            WHERE t.genus IS NOT NULL
            GROUP BY t.genus
            ORDER BY ct DESC, t.genus
            """
        )
        return [GenusStat(genus=genus, count=count) for genus, count in rows]


def _like_prefix(prefix: str) -> str:
    """Build a LIKE pattern matching values that start with ``prefix``."""
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped + "%"


def _parse_synonyms(raw: str | None) -> list[str]:
    if not raw:
        return []
    parsed = json.loads(raw)
    if not isinstance(parsed, list):
        raise ValueError(f"compound synonyms must be a JSON list, got: {raw!r}")
    return [str(item) for item in parsed]
