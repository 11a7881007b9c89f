# ============================================================================
# POSTGRESQL CONNECTION TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Catalog connection handling
# PURPOSE: Verify conninfo building and read-only connection lifecycle
# CREATED: 16 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Tests

psycopg.connect is patched; no database required.

Run with:
    pytest tests/test_postgresql.py -v
"""

from unittest.mock import MagicMock, patch

import psycopg
import pytest
from psycopg.conninfo import conninfo_to_dict

from core.config import ConnectionSettings
from core.errors import ConfigurationError
from infrastructure.postgresql import PostgreSQLRepository


class TestConnectionString:
    def test_fields_included(self):
        repo = PostgreSQLRepository(ConnectionSettings(
            user="app", dbname="shop", host="db", port=5433,
        ))
        params = conninfo_to_dict(repo.conn_string)
        assert params["user"] == "app"
        assert params["dbname"] == "shop"
        assert params["host"] == "db"
        assert params["port"] == "5433"
        assert params["sslmode"] == "prefer"
        assert "password" not in params

    def test_dsn_keeps_own_sslmode(self):
        repo = PostgreSQLRepository(ConnectionSettings(
            dsn="postgresql://app@db/shop?sslmode=require",
        ))
        assert conninfo_to_dict(repo.conn_string)["sslmode"] == "require"

    def test_fields_override_dsn(self):
        repo = PostgreSQLRepository(ConnectionSettings(
            dsn="postgresql://app@db/shop", dbname="inventory",
        ))
        assert conninfo_to_dict(repo.conn_string)["dbname"] == "inventory"

    def test_built_once(self):
        repo = PostgreSQLRepository(ConnectionSettings(dbname="shop"))
        assert repo.conn_string is repo.conn_string

    def test_missing_database_rejected(self):
        repo = PostgreSQLRepository(ConnectionSettings(user="app"))
        with pytest.raises(ConfigurationError):
            repo.conn_string


class TestGetConnection:
    @patch("infrastructure.postgresql.psycopg.connect")
    def test_read_only_and_closed(self, mock_connect):
        conn = MagicMock()
        mock_connect.return_value = conn
        repo = PostgreSQLRepository(ConnectionSettings(dbname="shop"))

        with repo.get_connection() as yielded:
            assert yielded is conn
            assert conn.read_only is True

        conn.close.assert_called_once()
        assert "row_factory" in mock_connect.call_args.kwargs

    @patch("infrastructure.postgresql.psycopg.connect")
    def test_connect_failure_propagates(self, mock_connect):
        mock_connect.side_effect = psycopg.OperationalError("no pg_hba.conf entry")
        repo = PostgreSQLRepository(ConnectionSettings(dbname="shop"))
        with pytest.raises(psycopg.OperationalError):
            with repo.get_connection():
                pass

    @patch("infrastructure.postgresql.psycopg.connect")
    def test_query_failure_rolls_back_and_closes(self, mock_connect):
        conn = MagicMock()
        mock_connect.return_value = conn
        repo = PostgreSQLRepository(ConnectionSettings(dbname="shop"))

        with pytest.raises(psycopg.errors.InsufficientPrivilege):
            with repo.get_connection():
                raise psycopg.errors.InsufficientPrivilege("permission denied")

        conn.rollback.assert_called_once()
        conn.close.assert_called_once()
