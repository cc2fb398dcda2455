"""Autocomplete suggestions for category values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from MibigSearch.core.categories import BOOLEAN_DESCRIPTIONS, Category
from MibigSearch.core.errors import InvalidCategoryError
from MibigSearch.core.models import AvailableTerm

if TYPE_CHECKING:
    from MibigSearch.services.store import CatalogueStore

# Checked in this order; only the first word starting with the prefix is
# suggested, so an empty prefix yields "true" alone.
_BOOLEAN_WORDS: Final[tuple[tuple[str, str], ...]] = (
    ("true", "true"),
    ("yes", "true"),
    ("false", "false"),
    ("no", "false"),
)


@dataclass(slots=True)
class AutocompleteProvider:
    """Suggest values of a category starting with a typed prefix."""

    store: CatalogueStore

    def available(self, category: str | Category, prefix: str) -> list[AvailableTerm]:
        """Return candidate values for ``category`` starting with ``prefix``.

        Raises:
            InvalidCategoryError: If ``category`` is unknown or not searchable.
        """
        resolved = Category.parse(category)
        if resolved is Category.UNKNOWN:
            raise InvalidCategoryError(str(category))
        if resolved.is_boolean:
            return boolean_options(prefix, BOOLEAN_DESCRIPTIONS[resolved])
        return list(self.store.values_matching_prefix(resolved, prefix))


def boolean_options(prefix: str, description: str) -> list[AvailableTerm]:
    """Suggest at most one boolean value for what the user typed so far."""
    for word, value in _BOOLEAN_WORDS:
        if word.startswith(prefix):
            return [AvailableTerm(value=value, description=description)]
    return []
