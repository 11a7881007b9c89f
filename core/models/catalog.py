# ============================================================================
# CATALOG ROW MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core model - Raw information_schema rows
# PURPOSE: Typed records for the three catalog queries
# CREATED: 14 OCT 2026
# EXPORTS: ColumnMeta, PrimaryKeyMeta, ForeignKeyMeta, CatalogSnapshot
# DEPENDENCIES: pydantic
# ============================================================================
"""
Catalog Row Models

Raw rows exactly as the catalog reader returns them. No normalization
happens here; the builder is the only consumer.

Each model has a from_row() constructor that accepts a dict_row mapping
keyed by the column aliases used in infrastructure/catalog_reader.py.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ColumnMeta(BaseModel):
    """One row of the columns query."""

    model_config = ConfigDict(frozen=True)

    schema_name: str
    table_name: str
    column_name: str
    udt_name: str = Field(description="Native type tag, e.g. int4, timestamptz")
    is_nullable: bool = False
    column_default: Optional[str] = None
    ordinal_position: int = 0

    @property
    def table_ref(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ColumnMeta":
        return cls(
            schema_name=row["table_schema"],
            table_name=row["table_name"],
            column_name=row["column_name"],
            udt_name=row["udt_name"],
            is_nullable=bool(row["is_nullable"]),
            column_default=row.get("column_default"),
            ordinal_position=row.get("ordinal_position") or 0,
        )


class PrimaryKeyMeta(BaseModel):
    """One row of the primary-key membership query."""

    model_config = ConfigDict(frozen=True)

    schema_name: str
    table_name: str
    column_name: str

    @property
    def table_ref(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PrimaryKeyMeta":
        return cls(
            schema_name=row["table_schema"],
            table_name=row["table_name"],
            column_name=row["column_name"],
        )


class ForeignKeyMeta(BaseModel):
    """
    One column pair of a foreign-key constraint.

    Composite constraints arrive as several rows sharing constraint_name.
    """

    model_config = ConfigDict(frozen=True)

    constraint_name: str
    schema_name: str
    table_name: str
    column_name: str
    ref_schema_name: str
    ref_table_name: str
    ref_column_name: str

    @property
    def table_ref(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    @property
    def ref_table_ref(self) -> str:
        return f"{self.ref_schema_name}.{self.ref_table_name}"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ForeignKeyMeta":
        return cls(
            constraint_name=row["constraint_name"],
            schema_name=row["table_schema"],
            table_name=row["table_name"],
            column_name=row["column_name"],
            ref_schema_name=row["f_table_schema"],
            ref_table_name=row["f_table_name"],
            ref_column_name=row["f_column_name"],
        )


class CatalogSnapshot(BaseModel):
    """The three row streams read from one connection."""

    model_config = ConfigDict(frozen=True)

    columns: List[ColumnMeta] = Field(default_factory=list)
    primary_keys: List[PrimaryKeyMeta] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyMeta] = Field(default_factory=list)


__all__ = ["ColumnMeta", "PrimaryKeyMeta", "ForeignKeyMeta", "CatalogSnapshot"]
