"""Versioned migration files for the catalogue SQLite schema.

Each module in this package must expose a single ``MIGRATION`` constant of
type :class:`~MibigSearch.storage.migration.Migration`. Modules are
discovered and sorted by :func:`~MibigSearch.storage.migration.load_migrations`;
file names follow the ``vNNN_<description>.py`` convention.
"""
