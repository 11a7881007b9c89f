# ============================================================================
# SCHEMA MODEL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Catalog rows to SchemaIR
# PURPOSE: Merge columns, primary keys and foreign keys into ordered tables
# CREATED: 14 OCT 2026
# EXPORTS: SchemaModelBuilder
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema Model Builder.

Compiles a CatalogSnapshot into a SchemaIR in fixed stages:

1. Columns       - create table drafts, map names and types, detect
                   autoincrement (default starting with "nextval(")
2. Primary keys  - mark key membership (zero, one or many per table)
3. Foreign keys  - collect immutable KeyPair records per constraint
4. Names         - class and collection names, schema-prefixed where
                   tables in different schemas would share them
5. Finalize      - freeze every table with its ordered field tuple (once)
6. Key ordering  - align each constraint's owning columns to the
                   referenced table's primary-key order
7. Assemble      - SchemaIR with diagnostics and auxiliary imports

Drafts are private to one build() call. Nothing outside this module sees a
partially built table or constraint.

Usage:
    builder = SchemaModelBuilder(NameNormalizer({"people": "person"}))
    ir = builder.build(snapshot)
    for table in ir.tables.values():
        print(table.singular, table.columns())
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from core.logging import get_logger, log_context, log_checkpoint
from core.models.catalog import CatalogSnapshot, ColumnMeta
from core.models.diagnostics import Diagnostic, DiagnosticKind
from core.models.schema import (
    FieldModel,
    ForeignKeyModel,
    KeyPair,
    SchemaIR,
    ShimModel,
    TableModel,
    to_snake,
)
from core.schema.naming import NameNormalizer
from core.schema.type_map import TypeMapper

logger = get_logger(__name__)

# Opaque prefix match; the default expression is never parsed
AUTOINCREMENT_MARKER = "nextval("


@dataclass
class _TableDraft:
    table_ref: str
    schema_name: str
    table_name: str
    fields: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    primary_keys: Set[str] = field(default_factory=set)


@dataclass
class _ForeignKeyDraft:
    name: str
    owner_ref: str
    referenced_ref: str
    pairs: List[KeyPair] = field(default_factory=list)


def is_autoincrement(column_default: Optional[str]) -> bool:
    return column_default is not None and column_default.startswith(AUTOINCREMENT_MARKER)


def table_alias(table_name: str) -> str:
    alias = table_name[:1].lower()
    return alias if alias.isidentifier() else "t"


class SchemaModelBuilder:
    """
    Compiles catalog rows into the IR.

    A builder may be reused; every build() call starts from empty drafts and
    a fresh TypeMapper unless one was injected.
    """

    def __init__(
        self,
        normalizer: Optional[NameNormalizer] = None,
        type_mapper: Optional[TypeMapper] = None,
    ):
        self.normalizer = normalizer or NameNormalizer()
        self._type_mapper = type_mapper

    def build(self, snapshot: CatalogSnapshot) -> SchemaIR:
        mapper = self._type_mapper or TypeMapper()
        diagnostics: List[Diagnostic] = []

        drafts = self._collect_columns(snapshot, mapper, diagnostics)
        self._mark_primary_keys(snapshot, drafts, diagnostics)
        fk_drafts = self._collect_foreign_keys(snapshot)

        names = self._assign_names(drafts, diagnostics)
        tables = {
            ref: self._finalize_table(drafts[ref], *names[ref])
            for ref in sorted(drafts)
        }
        foreign_keys = self._finalize_foreign_keys(fk_drafts, tables, diagnostics)

        ir = SchemaIR(
            tables=tables,
            foreign_keys=foreign_keys,
            diagnostics=tuple(diagnostics),
            use_time=mapper.use_time,
            use_net=mapper.use_net,
        )

        logger.info(
            f"Compiled {len(tables)} tables, {len(foreign_keys)} foreign keys, "
            f"{len(diagnostics)} diagnostics"
        )
        log_checkpoint("schema_compiled", {
            "tables": len(tables),
            "foreign_keys": len(foreign_keys),
            "diagnostics": len(diagnostics),
        })
        return ir

    # =========================================================================
    # STAGE 1: COLUMNS
    # =========================================================================

    def _collect_columns(
        self,
        snapshot: CatalogSnapshot,
        mapper: TypeMapper,
        diagnostics: List[Diagnostic],
    ) -> Dict[str, _TableDraft]:
        drafts: Dict[str, _TableDraft] = {}

        for col in snapshot.columns:
            draft = drafts.get(col.table_ref)
            if draft is None:
                draft = _TableDraft(
                    table_ref=col.table_ref,
                    schema_name=col.schema_name,
                    table_name=col.table_name,
                )
                drafts[col.table_ref] = draft

            draft.fields[col.column_name] = self._field_draft(col, mapper, diagnostics)

        logger.debug(f"Collected {len(snapshot.columns)} columns into {len(drafts)} tables")
        return drafts

    def _field_draft(
        self,
        col: ColumnMeta,
        mapper: TypeMapper,
        diagnostics: List[Diagnostic],
    ) -> Dict[str, Any]:
        mapped = mapper.map(col.udt_name, col.is_nullable)
        attribute = self.normalizer.attribute(col.column_name)

        if mapped.unmapped:
            message = (
                f"{col.table_ref}.{col.column_name}: no mapping for type "
                f"'{col.udt_name}', using placeholder {mapped.type_name}"
            )
            with log_context(table=col.table_ref, column=col.column_name):
                logger.warning(message)
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.UNMAPPED_TYPE,
                table_ref=col.table_ref,
                column_name=col.column_name,
                message=message,
            ))

        autoincrement = is_autoincrement(col.column_default)

        shim = None
        if mapped.needs_shim:
            shim = ShimModel(
                name=f"str_{attribute}",
                type_name=mapped.shim_type,
                parser=mapped.shim_parser,
            )

        return {
            "identifier": self.normalizer.plural(col.column_name),
            "attribute": attribute,
            "type_name": mapped.type_name,
            "column_name": col.column_name,
            "column_type": col.udt_name,
            "nullable": col.is_nullable,
            "default": None if autoincrement else col.column_default,
            "autoincrement": autoincrement,
            "unmapped": mapped.unmapped,
            "ordinal_position": col.ordinal_position,
            "shim": shim,
        }

    # =========================================================================
    # STAGE 2: PRIMARY KEYS
    # =========================================================================

    def _mark_primary_keys(
        self,
        snapshot: CatalogSnapshot,
        drafts: Dict[str, _TableDraft],
        diagnostics: List[Diagnostic],
    ) -> None:
        for pk in snapshot.primary_keys:
            draft = drafts.get(pk.table_ref)
            if draft is None or pk.column_name not in draft.fields:
                message = (
                    f"Primary key column {pk.table_ref}.{pk.column_name} "
                    f"not found among introspected columns"
                )
                logger.warning(message)
                diagnostics.append(Diagnostic(
                    kind=DiagnosticKind.PRIMARY_KEY_UNRESOLVED,
                    table_ref=pk.table_ref,
                    column_name=pk.column_name,
                    message=message,
                ))
                continue
            draft.primary_keys.add(pk.column_name)

    # =========================================================================
    # STAGE 3: FOREIGN KEYS
    # =========================================================================

    @staticmethod
    def _collect_foreign_keys(snapshot: CatalogSnapshot) -> Dict[str, _ForeignKeyDraft]:
        """Group column pairs by constraint; a constraint spans one row per pair."""
        fk_drafts: Dict[str, _ForeignKeyDraft] = {}

        for row in snapshot.foreign_keys:
            # Constraint names are unique per table, not per schema
            key = f"{row.table_ref}.{row.constraint_name}"
            draft = fk_drafts.get(key)
            if draft is None:
                draft = _ForeignKeyDraft(
                    name=row.constraint_name,
                    owner_ref=row.table_ref,
                    referenced_ref=row.ref_table_ref,
                )
                fk_drafts[key] = draft
            draft.pairs.append(KeyPair(
                column_name=row.column_name,
                ref_column_name=row.ref_column_name,
            ))

        return fk_drafts

    # =========================================================================
    # STAGE 4: NAMES
    # =========================================================================

    def _assign_names(
        self,
        drafts: Dict[str, _TableDraft],
        diagnostics: List[Diagnostic],
    ) -> Dict[str, Tuple[str, str]]:
        """
        (singular, plural) per table, unique across the compiled schema.

        Tables whose names clash with a table in another schema take the
        schema as a prefix, so public.events and audit.events become
        PublicEvent and AuditEvent. A clash left after that, such as
        `user` and `users` in one schema, keeps the name on the first table
        in table_ref order and records NAME_COLLISION for the others.
        """
        names = {
            ref: (self.normalizer.singular(d.table_name), self.normalizer.plural(d.table_name))
            for ref, d in drafts.items()
        }

        groups: Dict[Tuple[str, str], List[str]] = {}
        for ref in sorted(names):
            for key in self._name_keys(*names[ref]):
                groups.setdefault(key, []).append(ref)

        prefixed = set()
        for refs in groups.values():
            if len({drafts[ref].schema_name for ref in refs}) > 1:
                prefixed.update(refs)
        for ref in sorted(prefixed):
            prefix = self.normalizer.plural(drafts[ref].schema_name)
            singular, plural = names[ref]
            names[ref] = (prefix + singular, prefix + plural)
            logger.debug(f"{ref}: name shared across schemas, using {prefix + singular}")

        claimed: Dict[Tuple[str, str], str] = {}
        for ref in sorted(names):
            keys = self._name_keys(*names[ref])
            holder = next((claimed[key] for key in keys if key in claimed), None)
            if holder is None:
                for key in keys:
                    claimed[key] = ref
                continue

            message = (
                f"{ref}: generated name {names[ref][0]} clashes with {holder}; "
                f"no code is emitted for {ref}"
            )
            with log_context(table=ref):
                logger.warning(message)
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.NAME_COLLISION,
                table_ref=ref,
                message=message,
            ))

        return names

    @staticmethod
    def _name_keys(singular: str, plural: str) -> Tuple[Tuple[str, str], ...]:
        """Generated-code namespaces a table occupies: class/item helpers and list helpers."""
        return (("singular", to_snake(singular)), ("plural", to_snake(plural)))

    # =========================================================================
    # STAGE 5: FINALIZE TABLES
    # =========================================================================

    def _finalize_table(self, draft: _TableDraft, singular: str, plural: str) -> TableModel:
        field_map = {
            name: FieldModel(primary_key=name in draft.primary_keys, **kwargs)
            for name, kwargs in draft.fields.items()
        }
        ordered = tuple(sorted(
            field_map.values(),
            key=lambda f: (f.ordinal_position, f.column_name),
        ))

        return TableModel(
            table_ref=draft.table_ref,
            schema_name=draft.schema_name,
            table_name=draft.table_name,
            singular=singular,
            plural=plural,
            alias=table_alias(draft.table_name),
            field_map=field_map,
            ordered_fields=ordered,
        )

    # =========================================================================
    # STAGE 6: FOREIGN KEY ORDERING
    # =========================================================================

    def _finalize_foreign_keys(
        self,
        fk_drafts: Dict[str, _ForeignKeyDraft],
        tables: Dict[str, TableModel],
        diagnostics: List[Diagnostic],
    ) -> Dict[str, ForeignKeyModel]:
        foreign_keys: Dict[str, ForeignKeyModel] = {}

        for key in sorted(fk_drafts):
            draft = fk_drafts[key]
            with log_context(table=draft.owner_ref, constraint=draft.name):
                fk = self._finalize_foreign_key(draft, tables, diagnostics)
            if fk is not None:
                foreign_keys[key] = fk

        return foreign_keys

    def _finalize_foreign_key(
        self,
        draft: _ForeignKeyDraft,
        tables: Dict[str, TableModel],
        diagnostics: List[Diagnostic],
    ) -> Optional[ForeignKeyModel]:
        owner = tables.get(draft.owner_ref)
        referenced = tables.get(draft.referenced_ref)
        missing_columns = (
            [p.column_name for p in draft.pairs if p.column_name not in owner.field_map]
            if owner is not None else []
        )

        if owner is None or referenced is None or missing_columns:
            message = (
                f"Foreign key {draft.name} on {draft.owner_ref} -> "
                f"{draft.referenced_ref} cannot be resolved against introspected tables"
            )
            logger.warning(message)
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.FOREIGN_KEY_UNRESOLVED,
                table_ref=draft.owner_ref,
                constraint_name=draft.name,
                message=message,
            ))
            return None

        pairs = tuple(draft.pairs)
        key_columns = self.order_key_columns(pairs, referenced)

        problem = self._key_problem(pairs, key_columns, referenced)
        if problem:
            message = f"Foreign key {draft.name} on {owner.table_ref}: {problem}"
            logger.warning(message)
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.FOREIGN_KEY_MISMATCH,
                table_ref=owner.table_ref,
                constraint_name=draft.name,
                message=message,
            ))

        return ForeignKeyModel(
            name=draft.name,
            owner=owner,
            referenced=referenced,
            pairs=pairs,
            key_columns=key_columns,
        )

    @staticmethod
    def order_key_columns(pairs: Tuple[KeyPair, ...], referenced: TableModel) -> Tuple[str, ...]:
        """
        Owning columns in the referenced table's primary-key order.

        A single pair is taken as is. For composite constraints, each
        referenced primary-key field contributes the owning column paired
        with it; unmatched key fields contribute nothing, so the result is
        shorter than the key.
        """
        if len(pairs) == 1:
            return (pairs[0].column_name,)

        ordered = []
        for pk_field in referenced.primary_key_fields:
            for pair in pairs:
                if pair.ref_column_name == pk_field.column_name:
                    ordered.append(pair.column_name)
                    break
        return tuple(ordered)

    @staticmethod
    def _key_problem(
        pairs: Tuple[KeyPair, ...],
        key_columns: Tuple[str, ...],
        referenced: TableModel,
    ) -> Optional[str]:
        pk_names = [f.column_name for f in referenced.primary_key_fields]
        if len(key_columns) < len(pk_names):
            return (
                f"ordered key has {len(key_columns)} column(s) but "
                f"{referenced.table_ref} has {len(pk_names)} primary-key column(s)"
            )
        ref_columns = sorted(p.ref_column_name for p in pairs)
        if ref_columns != sorted(pk_names):
            return (
                f"references ({', '.join(ref_columns)}) which is not the primary key "
                f"({', '.join(pk_names) or 'none'}) of {referenced.table_ref}"
            )
        return None


__all__ = ["SchemaModelBuilder", "AUTOINCREMENT_MARKER", "is_autoincrement", "table_alias"]
