# ============================================================================
# SCHEMA CATALOG READER
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Infrastructure - information_schema introspection
# PURPOSE: Three read-only metadata queries, raw rows out
# CREATED: 14 OCT 2026
# EXPORTS: SchemaCatalogReader
# DEPENDENCIES: psycopg
# ============================================================================
"""
Schema Catalog Reader.

Pure data source for the builder. Issues three queries against
information_schema on the caller's connection:

    columns       - schema, table, column, udt_name, nullability, default
    primary keys  - schema, table, column
    foreign keys  - constraint, owning schema/table/column,
                    referenced schema/table/column (one row per column pair)

No retries: a partial schema view is not safe to compile from, so any
psycopg.Error propagates unchanged.

Usage:
    reader = SchemaCatalogReader(schemas=["public"])
    with repo.get_connection() as conn:
        snapshot = reader.read_all(conn)
"""

from typing import Iterable, List, Optional

from psycopg import sql

from core.logging import get_logger, log_checkpoint
from core.models.catalog import CatalogSnapshot, ColumnMeta, ForeignKeyMeta, PrimaryKeyMeta

logger = get_logger(__name__)

SYSTEM_SCHEMAS = ("pg_catalog", "information_schema")


COLUMNS_SQL = """
    SELECT c.table_schema, c.table_name, c.column_name, c.udt_name,
           (c.is_nullable = 'YES') AS is_nullable, c.column_default, c.ordinal_position
      FROM information_schema.columns c
     WHERE {filter}
     ORDER BY c.table_schema, c.table_name, c.ordinal_position
"""

PRIMARY_KEYS_SQL = """
    SELECT tc.table_schema, tc.table_name, kcu.column_name
      FROM information_schema.table_constraints tc
      JOIN information_schema.key_column_usage kcu
        ON kcu.constraint_schema = tc.constraint_schema
       AND kcu.constraint_name = tc.constraint_name
       AND kcu.table_name = tc.table_name
     WHERE tc.constraint_type = 'PRIMARY KEY' AND {filter}
     ORDER BY tc.table_schema, tc.table_name, kcu.ordinal_position
"""

# position_in_unique_constraint pairs each owning column with the referenced
# column it maps to, so composite keys yield one row per pair.
FOREIGN_KEYS_SQL = """
    SELECT kcu.constraint_name, kcu.table_schema, kcu.table_name, kcu.column_name,
           rcu.table_schema AS f_table_schema, rcu.table_name AS f_table_name,
           rcu.column_name AS f_column_name
      FROM information_schema.referential_constraints rc
      JOIN information_schema.key_column_usage kcu
        ON kcu.constraint_schema = rc.constraint_schema
       AND kcu.constraint_name = rc.constraint_name
      JOIN information_schema.key_column_usage rcu
        ON rcu.constraint_schema = rc.unique_constraint_schema
       AND rcu.constraint_name = rc.unique_constraint_name
       AND rcu.ordinal_position = kcu.position_in_unique_constraint
     WHERE {filter}
     ORDER BY kcu.table_schema, kcu.table_name, kcu.constraint_name, kcu.ordinal_position
"""


class SchemaCatalogReader:
    """
    Reads raw catalog rows.

    Args:
        schemas: restrict introspection to these schemas; by default every
                 schema except pg_catalog and information_schema
    """

    def __init__(self, schemas: Optional[Iterable[str]] = None):
        self.schemas = tuple(schemas or ())

    def _schema_filter(self, column: str) -> sql.Composed:
        ident = sql.SQL(column)
        if self.schemas:
            return sql.SQL("{} = ANY({})").format(ident, sql.Literal(list(self.schemas)))
        return sql.SQL("{} NOT IN ({})").format(
            ident,
            sql.SQL(", ").join(sql.Literal(s) for s in SYSTEM_SCHEMAS),
        )

    def _query(self, template: str, column: str) -> sql.Composed:
        return sql.SQL(template).format(filter=self._schema_filter(column))

    def _fetch(self, conn, query: sql.Composed) -> List[dict]:
        with conn.cursor() as cur:
            cur.execute(query)
            return cur.fetchall()

    def read_columns(self, conn) -> List[ColumnMeta]:
        rows = self._fetch(conn, self._query(COLUMNS_SQL, "c.table_schema"))
        return [ColumnMeta.from_row(r) for r in rows]

    def read_primary_keys(self, conn) -> List[PrimaryKeyMeta]:
        rows = self._fetch(conn, self._query(PRIMARY_KEYS_SQL, "tc.table_schema"))
        return [PrimaryKeyMeta.from_row(r) for r in rows]

    def read_foreign_keys(self, conn) -> List[ForeignKeyMeta]:
        rows = self._fetch(conn, self._query(FOREIGN_KEYS_SQL, "kcu.table_schema"))
        return [ForeignKeyMeta.from_row(r) for r in rows]

    def read_all(self, conn) -> CatalogSnapshot:
        """Run the three queries in order on one connection."""
        snapshot = CatalogSnapshot(
            columns=self.read_columns(conn),
            primary_keys=self.read_primary_keys(conn),
            foreign_keys=self.read_foreign_keys(conn),
        )
        logger.info(
            f"Read {len(snapshot.columns)} columns, {len(snapshot.primary_keys)} "
            f"primary-key columns, {len(snapshot.foreign_keys)} foreign-key pairs"
        )
        log_checkpoint("catalog_read", {
            "columns": len(snapshot.columns),
            "primary_keys": len(snapshot.primary_keys),
            "foreign_keys": len(snapshot.foreign_keys),
        })
        return snapshot


__all__ = [
    "SchemaCatalogReader",
    "COLUMNS_SQL",
    "PRIMARY_KEYS_SQL",
    "FOREIGN_KEYS_SQL",
]
