# ============================================================================
# MODULE TEMPLATES
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Renderer - Jinja2 source templates
# PURPOSE: Text of the generated data-access module
# CREATED: 15 OCT 2026
# ============================================================================
"""
Jinja2 templates for the generated Python module.

Rendered with trim_blocks/lstrip_blocks, so block tags may be indented
freely. Every SQL fragment comes from the IR accessor surface and passes
through the sql_literal filter before landing inside a string literal.
"""

MODULE_TEMPLATE = '''\
# Generated by {{ generated_by }} on {{ timestamp }}
# using pgmodelgen {{ version }}. Do not edit by hand.
"""
{{ package_name }}: data-access layer for {{ tables | length }} table(s).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union
{% for module in other_imports %}
import {{ module }}
{% endfor %}

import psycopg
from psycopg.rows import tuple_row

{% for table in tables %}
{% include "table" %}
{% endfor %}
{% for fk in foreign_keys %}
{% include "foreign_key" %}
{% endfor %}
'''

TABLE_TEMPLATE = '''\


# ----------------------------------------------------------------------------
# {{ table.table_ref }}
# ----------------------------------------------------------------------------

@dataclass
class {{ table.singular }}:
    """Row of {{ table.table_ref }}."""

{% for f in table.ordered_fields %}
    {{ f.attribute }}: {{ f.type_name }}{{ f | field_comment }}
{% endfor %}


{{ table.singular_stem | upper }}_SELECT = "SELECT {{ table.select_columns() | sql_literal }} FROM {{ table.qualified_name | sql_literal }}"


def _{{ table.singular_stem }}_from_row(row) -> {{ table.singular }}:
{% for f in table.shim_fields %}
    {{ f.shim.name }}: {{ f.shim.type_name }} = row[{{ table.ordered_fields.index(f) }}]
{% endfor %}
    return {{ table.singular }}(
{% for f in table.ordered_fields %}
{% if f.shim %}
{% if f.nullable %}
        {{ f.attribute }}={{ f.shim.parser }}({{ f.shim.name }}) if {{ f.shim.name }} is not None else None,
{% else %}
        {{ f.attribute }}={{ f.shim.parser }}({{ f.shim.name }}),
{% endif %}
{% else %}
        {{ f.attribute }}=row[{{ loop.index0 }}],
{% endif %}
{% endfor %}
    )


def list_{{ table.plural_stem }}(conn: psycopg.Connection) -> List[{{ table.singular }}]:
    with conn.cursor(row_factory=tuple_row) as cur:
        cur.execute({{ table.singular_stem | upper }}_SELECT)
        return [_{{ table.singular_stem }}_from_row(row) for row in cur.fetchall()]
{% if table.has_primary_key %}


def get_{{ table.singular_stem }}(conn: psycopg.Connection, {{ table.pk_params() }}) -> Optional[{{ table.singular }}]:
    with conn.cursor(row_factory=tuple_row) as cur:
        cur.execute(
            {{ table.singular_stem | upper }}_SELECT + " WHERE {{ table.where_pk() | sql_literal }}",
            ({{ table.pk_names() }},),
        )
        row = cur.fetchone()
    return _{{ table.singular_stem }}_from_row(row) if row is not None else None
{% endif %}


def insert_{{ table.singular_stem }}(conn: psycopg.Connection, {{ table.alias }}: {{ table.singular }}) -> {{ table.singular }}:
    """Insert and return the stored row, including database-assigned values."""
    with conn.cursor(row_factory=tuple_row) as cur:
{% if table.insert_columns() %}
        cur.execute(
            "INSERT INTO {{ table.qualified_name | sql_literal }} ({{ table.insert_columns() | sql_literal }}) "
            "VALUES ({{ table.insert_placeholders() | sql_literal }}) "
            "RETURNING {{ table.select_columns() | sql_literal }}",
            ({{ table.insert_field_refs() }},),
        )
{% else %}
        cur.execute(
            "INSERT INTO {{ table.qualified_name | sql_literal }} DEFAULT VALUES "
            "RETURNING {{ table.select_columns() | sql_literal }}"
        )
{% endif %}
        return _{{ table.singular_stem }}_from_row(cur.fetchone())
{% if table.has_primary_key and table.update_assignments() %}


def update_{{ table.singular_stem }}(conn: psycopg.Connection, {{ table.alias }}: {{ table.singular }}) -> int:
    with conn.cursor() as cur:
        cur.execute(
            "UPDATE {{ table.qualified_name | sql_literal }} SET {{ table.update_assignments() | sql_literal }} "
            "WHERE {{ table.where_pk() | sql_literal }}",
            ({{ table.update_field_refs() }}, {{ table.pk_field_refs() }},),
        )
        return cur.rowcount
{% endif %}
{% if table.has_primary_key %}


def delete_{{ table.singular_stem }}(conn: psycopg.Connection, {{ table.alias }}: {{ table.singular }}) -> int:
    with conn.cursor() as cur:
        cur.execute(
            "DELETE FROM {{ table.qualified_name | sql_literal }} WHERE {{ table.where_pk() | sql_literal }}",
            ({{ table.pk_field_refs() }},),
        )
        return cur.rowcount
{% endif %}
'''

FOREIGN_KEY_TEMPLATE = '''\


# ----------------------------------------------------------------------------
# {{ fk.owner.table_ref }} -> {{ fk.referenced.table_ref }} ({{ fk.name }})
# ----------------------------------------------------------------------------

def get_{{ fk.referenced.singular_stem }}_by_{{ fk.owner.singular_stem }}_{{ fk.stem }}(
    conn: psycopg.Connection, {{ fk.owner.alias }}: {{ fk.owner.singular }}
) -> Optional[{{ fk.referenced.singular }}]:
    with conn.cursor(row_factory=tuple_row) as cur:
        cur.execute(
            {{ fk.referenced.singular_stem | upper }}_SELECT + " WHERE {{ fk.referenced.where_pk() | sql_literal }}",
            ({{ fk.fk_field_refs() }},),
        )
        row = cur.fetchone()
    return _{{ fk.referenced.singular_stem }}_from_row(row) if row is not None else None


def list_{{ fk.owner.plural_stem }}_by_{{ fk.stem }}(
    conn: psycopg.Connection, {{ fk.referenced.alias }}: {{ fk.referenced.singular }}
) -> List[{{ fk.owner.singular }}]:
    with conn.cursor(row_factory=tuple_row) as cur:
        cur.execute(
            {{ fk.owner.singular_stem | upper }}_SELECT + " WHERE {{ fk.where_fk() | sql_literal }}",
            ({{ fk.referenced.pk_field_refs() }},),
        )
        return [_{{ fk.owner.singular_stem }}_from_row(row) for row in cur.fetchall()]
'''

TEMPLATES = {
    "module": MODULE_TEMPLATE,
    "table": TABLE_TEMPLATE,
    "foreign_key": FOREIGN_KEY_TEMPLATE,
}

__all__ = ["TEMPLATES", "MODULE_TEMPLATE", "TABLE_TEMPLATE", "FOREIGN_KEY_TEMPLATE"]
