# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Catalog row factories and sample schemas
# PURPOSE: Build CatalogSnapshots without a live database
# CREATED: 16 OCT 2026
# ============================================================================
"""
Shared fixtures.

The "shop" schema used across tests:

    public.users         id (int4, PK, serial), email (text), created_at (timestamp, null)
    public.orders        id (int8, PK, serial), user_id -> users.id,
                         placed_at (timestamptz), client_ip (inet, null)
    public.bins          warehouse_id (int4), bin_code (varchar), label (text, null)
                         PK (warehouse_id, bin_code)
    public.stock_levels  id (int4, PK), qty (int4), bin_code, warehouse_id
                         FK (bin_code, warehouse_id) -> bins; rows arrive
                         in the opposite order of the bins primary key
"""

import pytest

from core.models.catalog import CatalogSnapshot, ColumnMeta, ForeignKeyMeta, PrimaryKeyMeta


# ============================================================================
# ROW FACTORIES
# ============================================================================

def col(table, column, udt, nullable=False, default=None, position=0, schema="public"):
    return ColumnMeta(
        schema_name=schema,
        table_name=table,
        column_name=column,
        udt_name=udt,
        is_nullable=nullable,
        column_default=default,
        ordinal_position=position,
    )


def pk(table, column, schema="public"):
    return PrimaryKeyMeta(schema_name=schema, table_name=table, column_name=column)


def fk(name, table, column, ref_table, ref_column, schema="public", ref_schema="public"):
    return ForeignKeyMeta(
        constraint_name=name,
        schema_name=schema,
        table_name=table,
        column_name=column,
        ref_schema_name=ref_schema,
        ref_table_name=ref_table,
        ref_column_name=ref_column,
    )


SERIAL = "nextval('users_id_seq'::regclass)"


def users_columns():
    return [
        col("users", "id", "int4", default=SERIAL, position=1),
        col("users", "email", "text", position=2),
        col("users", "created_at", "timestamp", nullable=True, position=3),
    ]


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def users_snapshot():
    """The single-table example: users(id, email, created_at)."""
    return CatalogSnapshot(
        columns=users_columns(),
        primary_keys=[pk("users", "id")],
    )


@pytest.fixture
def shop_snapshot():
    """Four tables, one simple and one composite foreign key."""
    return CatalogSnapshot(
        columns=users_columns() + [
            col("orders", "id", "int8", default="nextval('orders_id_seq'::regclass)", position=1),
            col("orders", "user_id", "int4", position=2),
            col("orders", "placed_at", "timestamptz", default="now()", position=3),
            col("orders", "client_ip", "inet", nullable=True, position=4),
            col("bins", "warehouse_id", "int4", position=1),
            col("bins", "bin_code", "varchar", position=2),
            col("bins", "label", "text", nullable=True, position=3),
            col("stock_levels", "id", "int4", position=1),
            col("stock_levels", "qty", "int4", default="0", position=2),
            col("stock_levels", "bin_code", "varchar", position=3),
            col("stock_levels", "warehouse_id", "int4", position=4),
        ],
        primary_keys=[
            pk("users", "id"),
            pk("orders", "id"),
            pk("bins", "warehouse_id"),
            pk("bins", "bin_code"),
            pk("stock_levels", "id"),
        ],
        foreign_keys=[
            fk("orders_user_id_fkey", "orders", "user_id", "users", "id"),
            fk("stock_levels_bin_fkey", "stock_levels", "bin_code", "bins", "bin_code"),
            fk("stock_levels_bin_fkey", "stock_levels", "warehouse_id", "bins", "warehouse_id"),
        ],
    )
