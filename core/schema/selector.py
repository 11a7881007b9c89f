# ============================================================================
# TABLE SELECTOR
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Operator table selection
# PURPOSE: Filter the compiled tables by requested names
# CREATED: 14 OCT 2026
# EXPORTS: TableSelector, SelectionResult
# ============================================================================
"""
Table Selector.

A requested identifier matches a table by full reference ("public.users")
or by bare table name ("users"); a bare name matches that table in every
introspected schema. No identifiers selects everything.

Unknown identifiers are reported in SelectionResult.unknown and logged.
With strict=True they raise UnknownTableError instead.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from core.errors import UnknownTableError
from core.logging import get_logger
from core.models.schema import ForeignKeyModel, SchemaIR, TableModel

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    tables: Dict[str, TableModel] = field(default_factory=dict)
    unknown: Tuple[str, ...] = ()

    def foreign_keys(self, ir: SchemaIR) -> Dict[str, ForeignKeyModel]:
        """Foreign keys whose owning table is selected."""
        return {
            key: fk for key, fk in ir.foreign_keys.items()
            if fk.owner.table_ref in self.tables
        }


class TableSelector:

    def __init__(self, strict: bool = False):
        self.strict = strict

    def select(self, ir: SchemaIR, requested: Iterable[str] = ()) -> SelectionResult:
        requested = list(requested or [])
        if not requested:
            return SelectionResult(tables=dict(ir.tables))

        matched = set()
        unknown = []
        for name in requested:
            hits = [
                ref for ref, table in ir.tables.items()
                if name == ref or name == table.table_name
            ]
            if not hits:
                unknown.append(name)
            matched.update(hits)

        if unknown:
            if self.strict:
                raise UnknownTableError(unknown)
            logger.warning(f"Ignoring unknown table(s): {', '.join(unknown)}")

        # Keep the IR's ordering
        tables = {ref: t for ref, t in ir.tables.items() if ref in matched}
        logger.info(f"Selected {len(tables)} of {len(ir.tables)} tables")
        return SelectionResult(tables=tables, unknown=tuple(unknown))


__all__ = ["TableSelector", "SelectionResult"]
