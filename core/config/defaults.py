# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Run configuration
# PURPOSE: Connection settings, generator options, override-map parsing
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Defaults

Design:
- Immutable dataclasses for configuration
- Environment variable fallbacks (POSTGRES_*)
- Operator input validated here, before any catalog query runs
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from core.errors import ConfigurationError


DEFAULT_PACKAGE = "models"
DEFAULT_SSLMODE = "prefer"

DEPLURAL_USAGE = (
    "Invalid plural:singular map. Separate by colons then by commas. "
    "Ex: --deplural commas:comma,colons:colon"
)


def parse_deplural_map(values: Iterable[str]) -> Dict[str, str]:
    """
    Parse operator override pairs.

    Args:
        values: strings like "people:person,data:datum"; may be repeated

    Returns:
        Lower-cased plural -> singular mapping

    Raises:
        ConfigurationError: for any pair without a colon or with an empty side
    """
    words: Dict[str, str] = {}
    for value in values or []:
        for pair in value.split(","):
            plural, sep, single = pair.partition(":")
            plural, single = plural.strip(), single.strip()
            if not sep or not plural or not single:
                raise ConfigurationError(f"{DEPLURAL_USAGE} (got '{pair}')")
            words[plural.lower()] = single.lower()
    return words


@dataclass(frozen=True)
class ConnectionSettings:
    """
    Catalog connection parameters.

    user/dbname are the principal identity and database; a full dsn, when
    given, takes precedence over the individual fields.
    """
    user: Optional[str] = None
    dbname: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    password: Optional[str] = None
    sslmode: str = DEFAULT_SSLMODE
    dsn: Optional[str] = None

    def validate(self) -> None:
        if not self.dsn and not self.dbname:
            raise ConfigurationError(
                "Database connection not configured. "
                "Pass --name/--dsn or set POSTGRES_DB."
            )

    @classmethod
    def from_env(cls, **overrides) -> "ConnectionSettings":
        """Create from environment variables; non-None overrides win."""
        port = os.getenv("POSTGRES_PORT")
        values = {
            "user": os.getenv("POSTGRES_USER"),
            "dbname": os.getenv("POSTGRES_DB"),
            "host": os.getenv("POSTGRES_HOST"),
            "port": int(port) if port else None,
            "password": os.getenv("POSTGRES_PASSWORD"),
            "sslmode": os.getenv("POSTGRES_SSLMODE", DEFAULT_SSLMODE),
            "dsn": os.getenv("DATABASE_URL"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything one generation run needs besides the connection."""
    package_name: str = DEFAULT_PACKAGE
    deplural: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    tables: Tuple[str, ...] = ()
    schemas: Tuple[str, ...] = ()
    strict_tables: bool = False
    strict_keys: bool = False
    output_path: Optional[str] = None

    def validate(self) -> None:
        if not self.package_name.isidentifier():
            raise ConfigurationError(
                f"Package name '{self.package_name}' is not a valid Python identifier"
            )


__all__ = [
    "ConnectionSettings",
    "GeneratorConfig",
    "parse_deplural_map",
    "DEFAULT_PACKAGE",
]
