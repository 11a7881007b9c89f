# ============================================================================
# RENDERER MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Renderer exports
# PURPOSE: SchemaIR to Python source
# CREATED: 15 OCT 2026
# ============================================================================

from renderer.python_renderer import PythonModuleRenderer, RenderError, field_comment, sql_literal

__all__ = ["PythonModuleRenderer", "RenderError", "field_comment", "sql_literal"]
