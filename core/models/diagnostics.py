# ============================================================================
# COMPILATION DIAGNOSTICS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core model - Non-fatal compile findings
# PURPOSE: Explicit values for unmapped types, key and name inconsistencies
# CREATED: 14 OCT 2026
# EXPORTS: Diagnostic, DiagnosticKind, Severity
# DEPENDENCIES: pydantic
# ============================================================================
"""
Compilation Diagnostics

The builder never drops a problem silently. Anything that would otherwise
need a magic string in the generated output is recorded here and surfaced
through the IR (SchemaIR.diagnostics) and the log.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class DiagnosticKind(str, Enum):
    """What went wrong."""
    UNMAPPED_TYPE = "unmapped_type"
    PRIMARY_KEY_UNRESOLVED = "primary_key_unresolved"
    FOREIGN_KEY_UNRESOLVED = "foreign_key_unresolved"
    FOREIGN_KEY_MISMATCH = "foreign_key_mismatch"
    NAME_COLLISION = "name_collision"

    def is_structural(self) -> bool:
        """Key and naming findings; these can be made fatal with strict key checking."""
        return self is not DiagnosticKind.UNMAPPED_TYPE


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """One finding, tied to the table (and column or constraint) it concerns."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    severity: Severity = Severity.WARNING
    table_ref: str
    column_name: Optional[str] = None
    constraint_name: Optional[str] = None
    message: str

    @property
    def is_structural(self) -> bool:
        return self.kind.is_structural()

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.kind.value}: {self.message}"


__all__ = ["Diagnostic", "DiagnosticKind", "Severity"]
