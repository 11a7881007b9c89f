# ============================================================================
# SCHEMA COMPILER MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Catalog rows to IR
# PURPOSE: Name normalization, type mapping, model building, selection
# CREATED: 14 OCT 2026
# ============================================================================

from core.schema.naming import NameNormalizer
from core.schema.type_map import (
    TypeMapper,
    TypeSpec,
    MappedType,
    ImportGroup,
    TYPE_MAP,
)
from core.schema.builder import SchemaModelBuilder
from core.schema.selector import TableSelector, SelectionResult

__all__ = [
    # Compiler
    "SchemaModelBuilder",
    "TableSelector",
    "SelectionResult",
    # Utilities
    "NameNormalizer",
    "TypeMapper",
    "TypeSpec",
    "MappedType",
    "ImportGroup",
    "TYPE_MAP",
]
