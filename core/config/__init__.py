# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Module

Provides run configuration for pgmodelgen.
"""

from core.config.defaults import (
    ConnectionSettings,
    GeneratorConfig,
    parse_deplural_map,
    DEFAULT_PACKAGE,
)

__all__ = [
    "ConnectionSettings",
    "GeneratorConfig",
    "parse_deplural_map",
    "DEFAULT_PACKAGE",
]
