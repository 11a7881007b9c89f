# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Infrastructure - Database access
# PURPOSE: Catalog connection and introspection queries
# CREATED: 14 OCT 2026
# ============================================================================
"""
Infrastructure module for pgmodelgen.

Provides:
- PostgreSQLRepository: read-only catalog connection
- SchemaCatalogReader: the three information_schema queries

Usage:
    from infrastructure import PostgreSQLRepository, SchemaCatalogReader

    repo = PostgreSQLRepository()
    with repo.get_connection() as conn:
        snapshot = SchemaCatalogReader().read_all(conn)
"""

from infrastructure.postgresql import PostgreSQLRepository
from infrastructure.catalog_reader import SchemaCatalogReader

__all__ = [
    "PostgreSQLRepository",
    "SchemaCatalogReader",
]
