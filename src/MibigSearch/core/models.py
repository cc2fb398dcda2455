from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class TypeNode:
    """One node of the biosynthetic type classification.

    Attributes:
        id: Store identifier of the node.
        name: Search term of the type (e.g. "polyketide", "transatpks").
        description: Human-readable name (e.g. "Trans-AT type I polyketide").
        display_class: CSS-safe class of the top-level group (e.g. "pks").
        parent_id: Identifier of the parent node, None for top-level classes.
    """

    id: int
    name: str
    description: str
    display_class: str
    parent_id: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Product:
    """A compound produced by a gene cluster."""

    name: str
    synonyms: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class ProductTag:
    """Display tag for one type a record is classified under."""

    name: str
    css_class: str


@dataclass(frozen=True, slots=True)
class RepositoryEntry:
    """Display-ready catalogue record.

    Attributes:
        accession: Record identifier (e.g. "BGC0000001").
        quality: Annotation quality flag.
        completeness: Locus completeness ("complete", "incomplete", ...).
        status: Entry status ("active", "retired", ...).
        minimal: Whether the entry is a minimal annotation.
        products: Products in store order, duplicates preserved.
        tags: Type tags ordered by (css_class, name).
        organism: Organism name.
    """

    accession: str
    quality: Optional[str]
    completeness: Optional[str]
    status: Optional[str]
    minimal: bool
    products: Sequence[Product]
    tags: Sequence[ProductTag]
    organism: Optional[str]


@dataclass(frozen=True, slots=True)
class RawEntryRow:
    """Unassembled record data returned by the store in one batched call."""

    accession: str
    quality: Optional[str]
    completeness: Optional[str]
    status: Optional[str]
    minimal: bool
    organism: Optional[str]
    products: Sequence[Product] = ()
    tags: Sequence[ProductTag] = ()


@dataclass(frozen=True, slots=True)
class LabelsAndCounts:
    """Parallel label/count lists; ``labels[i]`` is counted by ``counts[i]``."""

    labels: Sequence[str] = ()
    counts: Sequence[int] = ()

    def as_dict(self) -> dict[str, int]:
        return dict(zip(self.labels, self.counts))


@dataclass(frozen=True, slots=True)
class ResultStats:
    """Aggregate breakdowns of a result set by type and by phylum."""

    by_type: LabelsAndCounts = field(default_factory=LabelsAndCounts)
    by_phylum: LabelsAndCounts = field(default_factory=LabelsAndCounts)


@dataclass(frozen=True, slots=True)
class AvailableTerm:
    """Autocomplete candidate."""

    value: str
    description: str


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Full response of a catalogue search."""

    total: int
    entries: Sequence[RepositoryEntry]
    stats: ResultStats


@dataclass(frozen=True, slots=True)
class CatalogueCounts:
    total: int
    complete: int
    incomplete: int
    minimal: int


@dataclass(frozen=True, slots=True)
class TypeStat:
    type: str
    description: str
    count: int
    css_class: str


@dataclass(frozen=True, slots=True)
class GenusStat:
    genus: str
    count: int
