# ============================================================================
# TYPE MAPPER
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - PostgreSQL udt_name to Python type mapping
# PURPOSE: Map native column types, track nullability and auxiliary imports
# CREATED: 14 OCT 2026
# EXPORTS: TypeMapper, TypeSpec, MappedType, TYPE_MAP, ImportGroup
# ============================================================================
"""
Type Mapper.

Maps information_schema.columns.udt_name tags to the Python types used in
generated dataclasses.

Network types are read through a string shim: the generated code fetches
the text form and converts it with the listed parser, so the module does not
depend on psycopg's adapter configuration.

Unknown tags map to a FIXME_<tag> placeholder. The generated module still
imports (annotations are not evaluated) but any type checker flags the
field, and the builder records an UNMAPPED_TYPE diagnostic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class ImportGroup(str, Enum):
    """Auxiliary stdlib modules a generated module may need."""
    TIME = "datetime"
    NET = "ipaddress"


@dataclass(frozen=True)
class TypeSpec:
    type_name: str
    import_group: Optional[ImportGroup] = None
    shim_parser: Optional[str] = None


@dataclass(frozen=True)
class MappedType:
    """Result of mapping one column."""
    type_name: str
    import_group: Optional[ImportGroup] = None
    shim_type: Optional[str] = None
    shim_parser: Optional[str] = None
    unmapped: bool = False

    @property
    def needs_shim(self) -> bool:
        return self.shim_parser is not None


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP: Dict[str, TypeSpec] = {
    "bool": TypeSpec("bool"),
    "bytea": TypeSpec("bytes"),
    "int2": TypeSpec("int"),
    "int4": TypeSpec("int"),
    "int8": TypeSpec("int"),
    "float4": TypeSpec("float"),
    "float8": TypeSpec("float"),
    "numeric": TypeSpec("float"),  # psycopg yields Decimal at runtime
    "money": TypeSpec("float"),
    "char": TypeSpec("str"),
    "bpchar": TypeSpec("str"),
    "varchar": TypeSpec("str"),
    "text": TypeSpec("str"),
    "xml": TypeSpec("str"),
    "uuid": TypeSpec("str"),
    "macaddr": TypeSpec("str"),
    "inet": TypeSpec(
        "Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]",
        ImportGroup.NET,
        "ipaddress.ip_interface",
    ),
    "cidr": TypeSpec(
        "Union[ipaddress.IPv4Network, ipaddress.IPv6Network]",
        ImportGroup.NET,
        "ipaddress.ip_network",
    ),
    "date": TypeSpec("datetime.date", ImportGroup.TIME),
    "time": TypeSpec("datetime.time", ImportGroup.TIME),
    "timetz": TypeSpec("datetime.time", ImportGroup.TIME),
    "timestamp": TypeSpec("datetime.datetime", ImportGroup.TIME),
    "timestamptz": TypeSpec("datetime.datetime", ImportGroup.TIME),
    # abstime, reltime, interval, tinterval, bit, varbit, tsvector, tsquery: unmapped
}

SHIM_TYPE = "str"
PLACEHOLDER_PREFIX = "FIXME_"


def optional(type_name: str) -> str:
    return f"Optional[{type_name}]"


class TypeMapper:
    """
    Maps native type tags and remembers which auxiliary imports were used.

    One instance per compilation; the use_* flags are schema-wide.
    """

    def __init__(self, type_map: Optional[Dict[str, TypeSpec]] = None):
        self.type_map = dict(TYPE_MAP if type_map is None else type_map)
        self.use_time = False
        self.use_net = False

    def map(self, udt_name: str, nullable: bool) -> MappedType:
        spec = self.type_map.get(udt_name)
        if spec is None:
            placeholder = PLACEHOLDER_PREFIX + udt_name
            return MappedType(
                type_name=optional(placeholder) if nullable else placeholder,
                unmapped=True,
            )

        if spec.import_group is ImportGroup.TIME:
            self.use_time = True
        elif spec.import_group is ImportGroup.NET:
            self.use_net = True

        type_name = spec.type_name
        shim_type = SHIM_TYPE if spec.shim_parser else None
        if nullable:
            type_name = optional(type_name)
            if shim_type:
                shim_type = optional(shim_type)

        return MappedType(
            type_name=type_name,
            import_group=spec.import_group,
            shim_type=shim_type,
            shim_parser=spec.shim_parser,
        )

    @property
    def other_imports(self) -> List[str]:
        imports = []
        if self.use_time:
            imports.append(ImportGroup.TIME.value)
        if self.use_net:
            imports.append(ImportGroup.NET.value)
        return imports


__all__ = [
    "TypeMapper",
    "TypeSpec",
    "MappedType",
    "ImportGroup",
    "TYPE_MAP",
    "PLACEHOLDER_PREFIX",
]
