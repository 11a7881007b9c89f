# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: One read-only catalog connection per run
# CREATED: 14 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides the catalog connection:
- libpq conninfo built from ConnectionSettings (or an explicit DSN)
- Read-only sessions; the catalog is never modified
- Context manager for safe resource management

Connection and authorization errors are logged and re-raised unchanged.
"""

from typing import Any, Dict, Optional
from contextlib import contextmanager

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row

from core.config import ConnectionSettings
from core.logging import get_logger

logger = get_logger(__name__)


class PostgreSQLRepository:
    """
    Connection management for catalog introspection.

    Usage:
        repo = PostgreSQLRepository(ConnectionSettings(user="app", dbname="shop"))
        with repo.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
    """

    def __init__(self, settings: Optional[ConnectionSettings] = None):
        """
        Args:
            settings: Connection settings; defaults to ConnectionSettings.from_env()
        """
        self.settings = settings or ConnectionSettings.from_env()
        self._conn_string: Optional[str] = None

    @property
    def conn_string(self) -> str:
        """Get or build connection string (lazy)."""
        if self._conn_string is None:
            self._conn_string = self._build_connection_string()
        return self._conn_string

    def _build_connection_string(self) -> str:
        self.settings.validate()
        params: Dict[str, Any] = {
            "user": self.settings.user,
            "dbname": self.settings.dbname,
            "host": self.settings.host,
            "port": self.settings.port,
            "password": self.settings.password,
            "sslmode": self.settings.sslmode,
        }
        params = {k: v for k, v in params.items() if v is not None}
        if self.settings.dsn:
            # DSN carries its own sslmode
            params.pop("sslmode", None)
        conn_str = make_conninfo(self.settings.dsn or "", **params)

        logger.debug(f"Connection string built for {self.settings.dbname or 'dsn'}")
        return conn_str

    @contextmanager
    def get_connection(self):
        """
        Context manager for a read-only PostgreSQL connection.

        Yields:
            psycopg connection with dict_row factory
        """
        conn = None
        try:
            logger.debug("Connecting to PostgreSQL...")
            conn = psycopg.connect(self.conn_string, row_factory=dict_row)
            conn.read_only = True
            logger.debug("PostgreSQL connection established")
            yield conn

        except psycopg.Error as e:
            logger.error(f"PostgreSQL error: {e}")
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()


__all__ = ["PostgreSQLRepository"]
