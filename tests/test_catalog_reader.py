# ============================================================================
# CATALOG READER TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - information_schema introspection
# PURPOSE: Verify row conversion, schema filtering, error propagation
# CREATED: 16 OCT 2026
# ============================================================================
"""
Catalog Reader Tests

Uses a mocked psycopg connection; no database required.

Run with:
    pytest tests/test_catalog_reader.py -v
"""

from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg import sql

from infrastructure.catalog_reader import SchemaCatalogReader


COLUMN_ROWS = [
    {
        "table_schema": "public", "table_name": "users", "column_name": "id",
        "udt_name": "int4", "is_nullable": False,
        "column_default": "nextval('users_id_seq'::regclass)", "ordinal_position": 1,
    },
    {
        "table_schema": "public", "table_name": "users", "column_name": "created_at",
        "udt_name": "timestamp", "is_nullable": True,
        "column_default": None, "ordinal_position": 2,
    },
]

PK_ROWS = [
    {"table_schema": "public", "table_name": "users", "column_name": "id"},
]

FK_ROWS = [
    {
        "constraint_name": "orders_user_id_fkey",
        "table_schema": "public", "table_name": "orders", "column_name": "user_id",
        "f_table_schema": "public", "f_table_name": "users", "f_column_name": "id",
    },
]


def _mock_connection(*results):
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchall.side_effect = list(results)
    return conn, cursor


class TestReadAll:
    def test_rows_converted(self):
        conn, cursor = _mock_connection(COLUMN_ROWS, PK_ROWS, FK_ROWS)
        snapshot = SchemaCatalogReader().read_all(conn)

        assert [c.column_name for c in snapshot.columns] == ["id", "created_at"]
        assert snapshot.columns[1].is_nullable
        assert snapshot.columns[0].column_default.startswith("nextval(")
        assert snapshot.primary_keys[0].table_ref == "public.users"

        fk = snapshot.foreign_keys[0]
        assert fk.table_ref == "public.orders"
        assert fk.ref_table_ref == "public.users"
        assert fk.ref_column_name == "id"
        assert cursor.execute.call_count == 3

    def test_queries_are_composed(self):
        conn, cursor = _mock_connection([], [], [])
        SchemaCatalogReader().read_all(conn)
        for call in cursor.execute.call_args_list:
            assert isinstance(call.args[0], sql.Composed)

    def test_empty_catalog(self):
        conn, _ = _mock_connection([], [], [])
        snapshot = SchemaCatalogReader().read_all(conn)
        assert snapshot.columns == []
        assert snapshot.foreign_keys == []

    def test_errors_propagate(self):
        conn, cursor = _mock_connection()
        cursor.execute.side_effect = psycopg.OperationalError("permission denied")
        with pytest.raises(psycopg.OperationalError):
            SchemaCatalogReader().read_all(conn)


class TestSchemaFilter:
    def test_default_excludes_system_schemas(self):
        rendered = repr(SchemaCatalogReader()._schema_filter("c.table_schema"))
        assert "NOT IN" in rendered
        assert "Literal('pg_catalog')" in rendered
        assert "Literal('information_schema')" in rendered

    def test_explicit_schemas(self):
        reader = SchemaCatalogReader(schemas=["public", "audit"])
        rendered = repr(reader._schema_filter("c.table_schema"))
        assert "ANY" in rendered
        assert "Literal(['public', 'audit'])" in rendered
        assert "pg_catalog" not in rendered

    def test_schemas_stored_as_tuple(self):
        assert SchemaCatalogReader(["public"]).schemas == ("public",)
        assert SchemaCatalogReader().schemas == ()
