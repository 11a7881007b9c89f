# ============================================================================
# ERROR TAXONOMY
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Foundation - Exceptions raised by the compiler and CLI
# PURPOSE: One exception per fatal failure class
# CREATED: 14 OCT 2026
# ============================================================================
"""
Exceptions for pgmodelgen.

Fatal conditions only. Non-fatal conditions (unmapped types, key
inconsistencies) are Diagnostic values on the compiled IR, see
core.models.diagnostics.

Connectivity and authorization failures are not wrapped: psycopg.Error
propagates unmodified from the catalog reader.
"""

from typing import Sequence


class PgModelGenError(Exception):
    """Base class for all pgmodelgen errors."""


class ConfigurationError(PgModelGenError):
    """Invalid operator input detected before any catalog query runs."""


class UnknownTableError(PgModelGenError):
    """Strict selection was requested and some identifiers matched no table."""

    def __init__(self, unknown: Sequence[str]):
        self.unknown = tuple(unknown)
        super().__init__(f"Unknown table(s) requested: {', '.join(self.unknown)}")


class SchemaInconsistencyError(PgModelGenError):
    """Structural diagnostics were found and strict key checking is enabled."""

    def __init__(self, diagnostics: Sequence):
        self.diagnostics = tuple(diagnostics)
        lines = "; ".join(d.message for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} structural schema issue(s): {lines}")


__all__ = [
    "PgModelGenError",
    "ConfigurationError",
    "UnknownTableError",
    "SchemaInconsistencyError",
]
