# ============================================================================
# SCHEMA IR MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core model - Compiled intermediate representation
# PURPOSE: Name-normalized, type-mapped, ordered view of every table
# CREATED: 14 OCT 2026
# EXPORTS: ShimModel, FieldModel, TableModel, KeyPair, ForeignKeyModel, SchemaIR
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema IR Models

The only input a renderer receives. All models are frozen; the builder
creates each one exactly once per compilation.

Renderers consume TableModel.ordered_fields (never field_map iteration) and
the accessor methods below, which produce the SQL fragments and the
alias-qualified attribute lists used by the generated CRUD helpers.

Placeholders follow psycopg's positional %s style. Position N of a
primary-key parameter list binds to the N-th ordered primary-key field, and
ForeignKeyModel.key_columns is aligned to that same order.
"""

import re
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from core.models.diagnostics import Diagnostic


def to_snake(identifier: str) -> str:
    """UserAccount -> user_account."""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', identifier).lower()


_PLAIN_IDENTIFIER = re.compile(r"[a-z_][a-z0-9_]*")

# Reserved in PostgreSQL, including those only allowed as function or type names
RESERVED_WORDS = frozenset("""
    all analyse analyze and any array as asc asymmetric authorization binary
    both case cast check collate collation column concurrently constraint
    create cross current_catalog current_date current_role current_schema
    current_time current_timestamp current_user default deferrable desc
    distinct do else end except false fetch for foreign freeze from full
    grant group having ilike in initially inner intersect into is isnull
    join lateral leading left like limit localtime localtimestamp natural
    not notnull null offset on only or order outer overlaps placing primary
    references returning right select session_user similar some symmetric
    system_user table tablesample then to trailing true union unique user
    using variadic verbose when where window with
""".split())


def quote_ident(name: str) -> str:
    """
    SQL form of a catalog identifier.

    Plain lower-case names pass through; anything PostgreSQL would fold or
    reject is double-quoted with embedded quotes doubled. Percent signs are
    doubled for psycopg's %s parameter syntax.
    """
    if _PLAIN_IDENTIFIER.fullmatch(name) and name not in RESERVED_WORDS:
        return name
    return '"' + name.replace('"', '""').replace("%", "%%") + '"'


class ShimModel(BaseModel):
    """
    Intermediate string-typed value for types without a driver binding.

    The generated code reads the column into `name` (typed `type_name`) and
    converts it with `parser`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str
    parser: str


class FieldModel(BaseModel):
    """One column of one table."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Capitalized concatenation, e.g. CreatedAt")
    attribute: str = Field(description="Python attribute name, e.g. created_at")
    type_name: str = Field(description="Mapped type, Optional-wrapped when nullable")
    column_name: str
    column_type: str
    nullable: bool = False
    default: Optional[str] = None
    autoincrement: bool = False
    primary_key: bool = False
    unmapped: bool = False
    ordinal_position: int = 0
    shim: Optional[ShimModel] = None

    @property
    def sql_name(self) -> str:
        return quote_ident(self.column_name)

    @property
    def sql_type(self) -> str:
        return quote_ident(self.column_type)

    def condition(self) -> str:
        """'col = %s::type', the form used in WHERE and SET lists."""
        return f"{self.sql_name} = %s::{self.sql_type}"


class TableModel(BaseModel):
    """One table with its fields in stable order."""

    model_config = ConfigDict(frozen=True)

    table_ref: str
    schema_name: str
    table_name: str
    singular: str
    plural: str
    alias: str
    field_map: Dict[str, FieldModel] = Field(default_factory=dict)
    ordered_fields: Tuple[FieldModel, ...] = ()

    # =========================================================================
    # DERIVED NAMES
    # =========================================================================

    @property
    def qualified_name(self) -> str:
        """Quoted schema.table for use in SQL."""
        return f"{quote_ident(self.schema_name)}.{quote_ident(self.table_name)}"

    @property
    def singular_stem(self) -> str:
        return to_snake(self.singular)

    @property
    def plural_stem(self) -> str:
        return to_snake(self.plural)

    @property
    def primary_key_fields(self) -> List[FieldModel]:
        return [f for f in self.ordered_fields if f.primary_key]

    @property
    def primary_key_count(self) -> int:
        return len(self.primary_key_fields)

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key_count > 0

    @property
    def shim_fields(self) -> List[FieldModel]:
        return [f for f in self.ordered_fields if f.shim is not None]

    def field(self, column_name: str) -> FieldModel:
        return self.field_map[column_name]

    # =========================================================================
    # ACCESSOR SURFACE
    # =========================================================================

    def columns(self) -> str:
        """Comma-separated column list."""
        return ", ".join(f.sql_name for f in self.ordered_fields)

    def select_columns(self) -> str:
        """Column list for reads; shimmed columns are fetched as text."""
        return ", ".join(
            f"{f.sql_name}::text" if f.shim else f.sql_name
            for f in self.ordered_fields
        )

    def field_refs(self) -> str:
        """Alias-qualified attributes, e.g. 'u.id, u.email'."""
        return ", ".join(f"{self.alias}.{f.attribute}" for f in self.ordered_fields)

    def placeholders(self) -> str:
        return ", ".join("%s" for _ in self.ordered_fields)

    def insert_columns(self) -> str:
        """Columns supplied on insert; autoincrement columns are left to the database."""
        return ", ".join(f.sql_name for f in self.ordered_fields if not f.autoincrement)

    def insert_placeholders(self) -> str:
        return ", ".join(
            f"%s::{f.sql_type}" for f in self.ordered_fields if not f.autoincrement
        )

    def insert_field_refs(self) -> str:
        return ", ".join(
            f"{self.alias}.{f.attribute}" for f in self.ordered_fields if not f.autoincrement
        )

    def where_pk(self) -> str:
        return " and ".join(f.condition() for f in self.primary_key_fields)

    def pk_field_refs(self) -> str:
        return ", ".join(f"{self.alias}.{f.attribute}" for f in self.primary_key_fields)

    def pk_params(self) -> str:
        """Function parameters for a lookup by primary key, e.g. 'id: int'."""
        return ", ".join(f"{f.attribute}: {f.type_name}" for f in self.primary_key_fields)

    def pk_names(self) -> str:
        return ", ".join(f.attribute for f in self.primary_key_fields)

    def update_assignments(self) -> str:
        """SET list for non-key columns; bound before the primary-key values."""
        return ", ".join(f.condition() for f in self.ordered_fields if not f.primary_key)

    def update_field_refs(self) -> str:
        return ", ".join(
            f"{self.alias}.{f.attribute}" for f in self.ordered_fields if not f.primary_key
        )


class KeyPair(BaseModel):
    """One owning/referenced column pair of a foreign-key constraint."""

    model_config = ConfigDict(frozen=True)

    column_name: str
    ref_column_name: str


class ForeignKeyModel(BaseModel):
    """
    A foreign-key relationship from `owner` to `referenced`.

    key_columns are owning-side column names ordered to match
    referenced.primary_key_fields.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    owner: TableModel
    referenced: TableModel
    pairs: Tuple[KeyPair, ...] = ()
    key_columns: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.owner.table_ref}.{self.name}"

    @property
    def is_complete(self) -> bool:
        """Key covers exactly the referenced primary key, column for column."""
        pk_names = sorted(f.column_name for f in self.referenced.primary_key_fields)
        return (
            bool(pk_names)
            and len(self.key_columns) == len(pk_names)
            and sorted(p.ref_column_name for p in self.pairs) == pk_names
        )

    @property
    def key_fields(self) -> List[FieldModel]:
        return [self.owner.field_map[c] for c in self.key_columns]

    @property
    def stem(self) -> str:
        """Name fragment for generated relation helpers, from the key columns."""
        return "_".join(f.attribute for f in self.key_fields)

    def where_fk(self) -> str:
        return " and ".join(f.condition() for f in self.key_fields)

    def fk_field_refs(self) -> str:
        return ", ".join(f"{self.owner.alias}.{f.attribute}" for f in self.key_fields)


class SchemaIR(BaseModel):
    """Everything a renderer needs, and nothing else."""

    model_config = ConfigDict(frozen=True)

    tables: Dict[str, TableModel] = Field(default_factory=dict)
    foreign_keys: Dict[str, ForeignKeyModel] = Field(default_factory=dict)
    diagnostics: Tuple[Diagnostic, ...] = ()
    use_time: bool = False
    use_net: bool = False

    @property
    def other_imports(self) -> List[str]:
        imports = []
        if self.use_time:
            imports.append("datetime")
        if self.use_net:
            imports.append("ipaddress")
        return imports

    @property
    def structural_diagnostics(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_structural]


__all__ = [
    "ShimModel",
    "FieldModel",
    "TableModel",
    "KeyPair",
    "ForeignKeyModel",
    "SchemaIR",
    "to_snake",
    "quote_ident",
    "RESERVED_WORDS",
]
