"""Migration v001: catalogue schema (taxa, bgc_types, entries, compounds, loci)."""

from __future__ import annotations

from MibigSearch.storage.migration import Migration

MIGRATION = Migration(
    version=1,
    description="Catalogue schema: taxa, bgc_types, entries, rel_entries_types, compounds, loci",
    sql="""
        CREATE TABLE IF NOT EXISTS taxa (
          tax_id INTEGER PRIMARY KEY,
          name TEXT NOT NULL,
          superkingdom TEXT,
          kingdom TEXT,
          phylum TEXT,
          class TEXT,
          taxonomic_order TEXT,
          family TEXT,
          genus TEXT,
          species TEXT
        );

        CREATE TABLE IF NOT EXISTS bgc_types (
          bgc_type_id INTEGER PRIMARY KEY,
          name TEXT NOT NULL,
          description TEXT NOT NULL DEFAULT '',
          safe_class TEXT NOT NULL DEFAULT '',
          parent_id INTEGER REFERENCES bgc_types(bgc_type_id)
        );

        CREATE TABLE IF NOT EXISTS entries (
          accession TEXT PRIMARY KEY,
          status TEXT,
          quality TEXT,
          completeness TEXT,
          minimal INTEGER NOT NULL DEFAULT 0,
          tax_id INTEGER REFERENCES taxa(tax_id)
        );

        CREATE TABLE IF NOT EXISTS rel_entries_types (
          accession TEXT NOT NULL REFERENCES entries(accession) ON DELETE CASCADE,
          bgc_type_id INTEGER NOT NULL REFERENCES bgc_types(bgc_type_id),
          PRIMARY KEY (accession, bgc_type_id)
        );

        CREATE TABLE IF NOT EXISTS compounds (
          compound_id INTEGER PRIMARY KEY AUTOINCREMENT,
          accession TEXT NOT NULL REFERENCES entries(accession) ON DELETE CASCADE,
          name TEXT NOT NULL,
          synonyms TEXT
        );

        CREATE TABLE IF NOT EXISTS loci (
          locus_id INTEGER PRIMARY KEY AUTOINCREMENT,
          accession TEXT NOT NULL REFERENCES entries(accession) ON DELETE CASCADE,
          locus_accession TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_bgc_types_name
          ON bgc_types(lower(name));

        CREATE INDEX IF NOT EXISTS idx_bgc_types_parent
          ON bgc_types(parent_id);

        CREATE INDEX IF NOT EXISTS idx_entries_tax
          ON entries(tax_id);

        CREATE INDEX IF NOT EXISTS idx_rel_types_type
          ON rel_entries_types(bgc_type_id);

        CREATE INDEX IF NOT EXISTS idx_compounds_entry
          ON compounds(accession);

        CREATE INDEX IF NOT EXISTS idx_compounds_name
          ON compounds(lower(name));

        CREATE INDEX IF NOT EXISTS idx_loci_entry
          ON loci(accession);

        CREATE INDEX IF NOT EXISTS idx_taxa_genus
          ON taxa(lower(genus));

        CREATE INDEX IF NOT EXISTS idx_taxa_species
          ON taxa(lower(species))
    """,
)
