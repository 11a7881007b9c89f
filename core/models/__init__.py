# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Model exports
# PURPOSE: Central export point for catalog rows, diagnostics and the IR
# CREATED: 14 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Catalog rows (raw input) -> SchemaIR (compiled output).
All models are frozen Pydantic models.
"""

from core.models.catalog import ColumnMeta, PrimaryKeyMeta, ForeignKeyMeta, CatalogSnapshot
from core.models.diagnostics import Diagnostic, DiagnosticKind, Severity
from core.models.schema import (
    ShimModel,
    FieldModel,
    TableModel,
    KeyPair,
    ForeignKeyModel,
    SchemaIR,
)

__all__ = [
    # Catalog rows
    "ColumnMeta",
    "PrimaryKeyMeta",
    "ForeignKeyMeta",
    "CatalogSnapshot",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    # IR
    "ShimModel",
    "FieldModel",
    "TableModel",
    "KeyPair",
    "ForeignKeyModel",
    "SchemaIR",
]
