#!/usr/bin/env python
# ============================================================================
# PGMODELGEN - COMMAND LINE ENTRY POINT
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - CLI entry point
# PURPOSE: Introspect, compile, select, render
# CREATED: 15 OCT 2026
# USAGE:
#   pgmodelgen --user app --name shop > models.py
#   pgmodelgen --name shop --deplural people:person users orders
#   pgmodelgen --name shop --strict-tables --strict-keys -o shop/models.py
# ============================================================================
"""
pgmodelgen

Reads a PostgreSQL schema catalog and writes a Python data-access module
(dataclasses plus CRUD and relation helpers) for the selected tables.

Exit codes:
    0  module written
    1  database, selection, strict-key or render failure (nothing written)
    2  invalid configuration
"""

import argparse
import os
import sys
from typing import List, Optional

import psycopg

from __version__ import __version__
from core.config import ConnectionSettings, GeneratorConfig, parse_deplural_map
from core.errors import ConfigurationError, PgModelGenError, SchemaInconsistencyError
from core.logging import configure_logging, get_logger
from core.models.schema import SchemaIR
from core.schema import NameNormalizer, SchemaModelBuilder, TableSelector
from infrastructure import PostgreSQLRepository, SchemaCatalogReader
from renderer import PythonModuleRenderer

logger = get_logger(__name__)


def compile_schema(
    repo: PostgreSQLRepository,
    config: GeneratorConfig,
    reader: Optional[SchemaCatalogReader] = None,
) -> SchemaIR:
    """Read the catalog on one connection and compile it."""
    reader = reader or SchemaCatalogReader(schemas=config.schemas)
    with repo.get_connection() as conn:
        snapshot = reader.read_all(conn)

    builder = SchemaModelBuilder(NameNormalizer(config.deplural))
    ir = builder.build(snapshot)

    for diagnostic in ir.diagnostics:
        logger.debug(str(diagnostic))

    if config.strict_keys and ir.structural_diagnostics:
        raise SchemaInconsistencyError(ir.structural_diagnostics)
    return ir


def generate_module(
    repo: PostgreSQLRepository,
    config: GeneratorConfig,
    reader: Optional[SchemaCatalogReader] = None,
) -> str:
    """
    Full pipeline: catalog -> IR -> selection -> source.

    Raises:
        ConfigurationError: invalid generator config, before any connection
        psycopg.Error: connectivity or authorization failure
        SchemaInconsistencyError: structural diagnostics with strict_keys
        UnknownTableError: unknown tables with strict_tables
        RenderError: template failure
    """
    config.validate()
    ir = compile_schema(repo, config, reader)
    selection = TableSelector(strict=config.strict_tables).select(ir, config.tables)
    return PythonModuleRenderer(config.package_name).render(ir, selection)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgmodelgen",
        description="Generate a Python data-access module from a PostgreSQL schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pgmodelgen --user app --name shop > models.py
  pgmodelgen --name shop --deplural people:person,data:datum users orders
  pgmodelgen --dsn postgresql://app@db/shop --schema sales -o sales_models.py

Environment Variables:
  DATABASE_URL          Full PostgreSQL connection string
  POSTGRES_HOST         Database host
  POSTGRES_PORT         Database port
  POSTGRES_DB           Database name
  POSTGRES_USER         Database user
  POSTGRES_PASSWORD     Database password
  POSTGRES_SSLMODE      SSL mode (default: prefer)
  LOG_LEVEL             Log level (default: INFO)
  LOG_FORMAT            "json" for structured logs
        """,
    )
    parser.add_argument("tables", nargs="*",
                        help="Tables to generate (name or schema.name); default all")
    parser.add_argument("--user", help="Database username")
    parser.add_argument("--name", help="Database name")
    parser.add_argument("--host", help="Database host")
    parser.add_argument("--port", type=int, help="Database port")
    parser.add_argument("--dsn", help="PostgreSQL connection string (overrides environment)")
    parser.add_argument("--pkg", default="models", help="Generated package name (default: models)")
    parser.add_argument("--deplural", action="append", default=[],
                        help="Map from plural to singular words (words:word,others:other)")
    parser.add_argument("--schema", action="append", default=[], dest="schemas",
                        help="Only introspect this schema (repeatable)")
    parser.add_argument("--strict-tables", action="store_true",
                        help="Fail when a requested table does not exist")
    parser.add_argument("--strict-keys", action="store_true",
                        help="Fail on primary/foreign key inconsistencies and generated name collisions")
    parser.add_argument("--output", "-o", help="Write to this file instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else os.environ.get("LOG_LEVEL", "INFO"),
        json_output=args.json_logs,
    )

    try:
        config = GeneratorConfig(
            package_name=args.pkg,
            deplural=parse_deplural_map(args.deplural),
            tables=tuple(args.tables),
            schemas=tuple(args.schemas),
            strict_tables=args.strict_tables,
            strict_keys=args.strict_keys,
            output_path=args.output,
        )
        settings = ConnectionSettings.from_env(
            user=args.user,
            dbname=args.name,
            host=args.host,
            port=args.port,
            dsn=args.dsn,
        )
        settings.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    try:
        source = generate_module(PostgreSQLRepository(settings), config)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    except psycopg.Error as e:
        logger.error(f"Catalog introspection failed: {e}")
        return 1
    except PgModelGenError as e:
        logger.error(str(e))
        return 1

    if config.output_path:
        with open(config.output_path, "w", encoding="utf-8") as fh:
            fh.write(source)
        logger.info(f"Wrote {config.output_path}")
    else:
        sys.stdout.write(source)
    return 0


if __name__ == "__main__":
    sys.exit(main())
