"""Closed set of search categories recognized by the catalogue."""

from __future__ import annotations

from enum import Enum
from typing import Final

from MibigSearch.core.errors import InvalidCategoryError


class Category(str, Enum):
    """Named dimension of record metadata eligible for term matching."""

    TYPE = "type"
    ACCESSION = "accession"
    COMPOUND = "compound"
    SUPERKINGDOM = "superkingdom"
    KINGDOM = "kingdom"
    PHYLUM = "phylum"
    CLASS = "class"
    ORDER = "order"
    FAMILY = "family"
    GENUS = "genus"
    SPECIES = "species"
    COMPLETENESS = "completeness"
    MINIMAL = "minimal"
    NCBI_LOCUS = "ncbi-locus"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Category) -> Category:
        """Parse a category name, accepting legacy aliases.

        Raises:
            InvalidCategoryError: If the value is outside the closed set.
        """
        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            raise InvalidCategoryError(repr(value))
        key = value.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidCategoryError(value) from None

    @property
    def is_boolean(self) -> bool:
        return self in BOOLEAN_CATEGORIES


_ALIASES: Final[dict[str, str]] = {
    "acc": "accession",
    "ncbi": "ncbi-locus",
}

# Probe order used when guessing the category of an unqualified term.
# Earlier entries win ties, e.g. a term that is both a compound and a genus
# resolves to compound.
RESOLUTION_ORDER: Final[tuple[Category, ...]] = (
    Category.TYPE,
    Category.ACCESSION,
    Category.COMPOUND,
    Category.GENUS,
    Category.SPECIES,
)

BOOLEAN_CATEGORIES: Final[frozenset[Category]] = frozenset({Category.MINIMAL})

BOOLEAN_DESCRIPTIONS: Final[dict[Category, str]] = {
    Category.MINIMAL: "Minimal MIBiG entry",
}

# Categories answered by a flat, single-field lookup.
FIELD_CATEGORIES: Final[frozenset[Category]] = frozenset(
    c for c in Category if c not in (Category.TYPE, Category.UNKNOWN)
)
