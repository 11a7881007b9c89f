# ============================================================================
# PYTHON MODULE RENDERER
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Renderer - SchemaIR to Python source
# PURPOSE: Emit dataclasses and CRUD helpers for the selected tables
# CREATED: 15 OCT 2026
# EXPORTS: PythonModuleRenderer, RenderError
# DEPENDENCIES: jinja2
# ============================================================================
"""
Python Module Renderer

Turns the IR plus a table selection into the source of one Python module:
a dataclass per table, list/get/insert/update/delete helpers, and two
relation helpers per foreign key.

The renderer reads only the IR accessor surface; it has no schema
knowledge of its own. Relation helpers are emitted only for foreign keys
whose key is complete and whose both ends are selected. Tables carrying a
NAME_COLLISION diagnostic are left out.

Usage:
    renderer = PythonModuleRenderer(package_name="models")
    source = renderer.render(ir, selection)
"""

import ast
import getpass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set, Tuple

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from __version__ import __version__
from core.errors import PgModelGenError
from core.logging import get_logger, log_checkpoint
from core.models.diagnostics import DiagnosticKind
from core.models.schema import FieldModel, ForeignKeyModel, SchemaIR, TableModel
from core.schema.selector import SelectionResult
from renderer.templates import TEMPLATES

logger = get_logger(__name__)


class RenderError(PgModelGenError):
    """Template failed to render."""


def sql_literal(fragment: str) -> str:
    """Escape an SQL fragment for the inside of a double-quoted Python string."""
    return (
        fragment.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def field_comment(f: FieldModel) -> str:
    notes = []
    if f.primary_key:
        notes.append("primary key")
    if f.autoincrement:
        notes.append("autoincrement")
    if f.default is not None:
        notes.append("default " + " ".join(f.default.split()))
    if f.unmapped:
        notes.append(f"FIXME: no mapping for {f.column_type}")
    return f"  # {', '.join(notes)}" if notes else ""


class PythonModuleRenderer:
    """Jinja2-based renderer; one instance can render any number of modules."""

    def __init__(self, package_name: str = "models"):
        self.package_name = package_name
        self._env = Environment(
            loader=DictLoader(TEMPLATES),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["field_comment"] = field_comment
        self._env.filters["sql_literal"] = sql_literal

    @staticmethod
    def colliding_tables(ir: SchemaIR) -> Set[str]:
        return {
            d.table_ref for d in ir.diagnostics
            if d.kind is DiagnosticKind.NAME_COLLISION
        }

    def renderable_tables(
        self,
        ir: SchemaIR,
        selection: SelectionResult,
    ) -> List[TableModel]:
        colliding = self.colliding_tables(ir)
        result = []
        for table in selection.tables.values():
            if table.table_ref in colliding:
                logger.warning(f"Skipping {table.table_ref}: generated names clash with another table")
                continue
            result.append(table)
        return result

    def renderable_foreign_keys(
        self,
        ir: SchemaIR,
        selection: SelectionResult,
    ) -> List[ForeignKeyModel]:
        colliding = self.colliding_tables(ir)
        helper_names: Set[str] = set()
        result = []
        for fk in selection.foreign_keys(ir).values():
            if fk.referenced.table_ref not in selection.tables:
                logger.debug(f"Skipping {fk.key}: {fk.referenced.table_ref} not selected")
                continue
            if {fk.owner.table_ref, fk.referenced.table_ref} & colliding:
                logger.debug(f"Skipping {fk.key}: table names clash")
                continue
            if not fk.is_complete or not fk.key_columns:
                logger.info(f"Skipping relation helpers for incomplete foreign key {fk.key}")
                continue
            names = self.relation_helper_names(fk)
            if helper_names & set(names):
                logger.warning(f"Skipping {fk.key}: relation helpers {', '.join(names)} already emitted")
                continue
            helper_names.update(names)
            result.append(fk)
        return result

    @staticmethod
    def relation_helper_names(fk: ForeignKeyModel) -> Tuple[str, str]:
        """Function names of the get/list pair emitted for one foreign key."""
        return (
            f"get_{fk.referenced.singular_stem}_by_{fk.owner.singular_stem}_{fk.stem}",
            f"list_{fk.owner.plural_stem}_by_{fk.stem}",
        )

    def render(
        self,
        ir: SchemaIR,
        selection: Optional[SelectionResult] = None,
        generated_by: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """
        Render the module source.

        Args:
            ir: Compiled schema
            selection: Tables to emit; all tables when omitted
            generated_by: Name for the header; defaults to the current user
            timestamp: Header timestamp; defaults to now (UTC)

        Returns:
            Python source text. If it does not parse, a warning is logged
            and the text is returned as is so it can be fixed by hand.
        """
        if selection is None:
            selection = SelectionResult(tables=dict(ir.tables))

        context: Dict[str, object] = {
            "generated_by": generated_by or getpass.getuser(),
            "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
            "version": __version__,
            "package_name": self.package_name,
            "other_imports": self._other_imports(ir, selection),
            "tables": self.renderable_tables(ir, selection),
            "foreign_keys": self.renderable_foreign_keys(ir, selection),
        }

        try:
            source = self._env.get_template("module").render(context)
        except TemplateError as e:
            raise RenderError(f"Failed to render module {self.package_name}: {e}") from e

        try:
            ast.parse(source)
        except SyntaxError as e:
            logger.warning(f"Generated source does not parse (line {e.lineno}): {e.msg}")

        log_checkpoint("module_rendered", {
            "package": self.package_name,
            "tables": len(context["tables"]),
            "foreign_keys": len(context["foreign_keys"]),
        })
        return source

    @staticmethod
    def _other_imports(ir: SchemaIR, selection: SelectionResult) -> List[str]:
        """Schema-wide imports, narrowed to what the selected tables use."""
        used = set()
        for table in selection.tables.values():
            for f in table.ordered_fields:
                if "datetime." in f.type_name:
                    used.add("datetime")
                if "ipaddress." in f.type_name:
                    used.add("ipaddress")
        return [module for module in ir.other_imports if module in used]


__all__ = ["PythonModuleRenderer", "RenderError", "field_comment", "sql_literal"]
