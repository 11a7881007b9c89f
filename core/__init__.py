# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core module initialization
# PURPOSE: Export models, compiler and configuration
# CREATED: 14 OCT 2026
# ============================================================================

from core.errors import (
    PgModelGenError,
    ConfigurationError,
    UnknownTableError,
    SchemaInconsistencyError,
)
from core.models import (
    CatalogSnapshot,
    FieldModel,
    TableModel,
    ForeignKeyModel,
    SchemaIR,
    Diagnostic,
)
from core.schema import SchemaModelBuilder, TableSelector, NameNormalizer, TypeMapper

__all__ = [
    # Errors
    "PgModelGenError",
    "ConfigurationError",
    "UnknownTableError",
    "SchemaInconsistencyError",
    # Models
    "CatalogSnapshot",
    "FieldModel",
    "TableModel",
    "ForeignKeyModel",
    "SchemaIR",
    "Diagnostic",
    # Compiler
    "SchemaModelBuilder",
    "TableSelector",
    "NameNormalizer",
    "TypeMapper",
]
