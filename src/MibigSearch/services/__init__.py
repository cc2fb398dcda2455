"""Service layer: category resolution, query evaluation and result assembly."""

from __future__ import annotations

from typing import TYPE_CHECKING

from MibigSearch.services.search import CatalogueSearchService

if TYPE_CHECKING:
    from MibigSearch.config import AppConfig
    from MibigSearch.services.store import CatalogueStore


def create_search_service(config: AppConfig, store: CatalogueStore) -> CatalogueSearchService:
    """Create the search service from config.

    Args:
        config: Parsed application configuration.
        store: Catalogue store shared by all service components.

    Returns:
        Configured CatalogueSearchService.
    """
    return CatalogueSearchService.from_store(
        store,
        parallel=config.search.parallel,
        max_workers=config.search.max_workers,
        timeout=config.search.timeout,
    )


__all__ = ["CatalogueSearchService", "create_search_service"]
