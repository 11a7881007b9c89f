# ============================================================================
# STRUCTURED LOGGING TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Logging context and formatters
# PURPOSE: Verify context nesting, JSON and human output, checkpoints
# CREATED: 17 OCT 2026
# ============================================================================
"""
Structured Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

import pytest

from core.logging import (
    CONTEXT_FIELDS,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    log_checkpoint,
    log_context,
)


def _record(message="Unmapped type", extra=None):
    record = logging.LogRecord(
        name="core.schema.builder", level=logging.WARNING, pathname="builder.py",
        lineno=10, msg=message, args=(), exc_info=None,
    )
    if extra is not None:
        record.extra = extra
    return record


class TestLogContext:
    def test_nested_context_inherits(self):
        with log_context(table="public.users"):
            with log_context(column="email"):
                ctx = get_current_context()
                assert ctx.table == "public.users"
                assert ctx.column == "email"
            assert get_current_context().column is None
        assert get_current_context().table is None

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="schema"):
            with log_context(schema="public"):
                pass
        assert get_current_context().table is None

    def test_context_fields_printed(self):
        assert CONTEXT_FIELDS == {"table", "column", "constraint", "extra"}
        with log_context(table="public.orders", column="user_id", constraint="orders_user_fkey"):
            line = HumanFormatter().format(_record())
        assert "[table=public.orders, column=user_id, constraint=orders_user_fkey]" in line

    def test_to_dict_drops_empty_fields(self):
        with log_context(table="public.orders", extra={"udt_name": "tsvector"}):
            assert get_current_context().to_dict() == {
                "table": "public.orders",
                "udt_name": "tsvector",
            }


class TestFormatters:
    def test_structured_output(self):
        with log_context(table="public.users", constraint="users_org_fkey"):
            line = StructuredFormatter(include_source=False).format(
                _record(extra={"udt_name": "tsvector"})
            )
        data = json.loads(line)
        assert data["level"] == "WARNING"
        assert data["message"] == "Unmapped type"
        assert data["context"] == {"table": "public.users", "constraint": "users_org_fkey"}
        assert data["data"] == {"udt_name": "tsvector"}
        assert "source" not in data

    def test_structured_source(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert data["source"]["line"] == 10

    def test_human_output_includes_context(self):
        with log_context(table="public.users", column="created_at"):
            line = HumanFormatter().format(_record())
        assert "WARNING" in line
        assert "[table=public.users, column=created_at]" in line
        assert line.endswith("core.schema.builder [table=public.users, column=created_at]: Unmapped type")

    def test_human_output_without_context(self):
        line = HumanFormatter().format(_record("Compiled 4 tables"))
        assert line.endswith("core.schema.builder: Compiled 4 tables")


class TestCheckpoint:
    def test_checkpoint_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="checkpoint"):
            log_checkpoint("schema_compiled", {"tables": 4})
        record = caplog.records[-1]
        assert record.getMessage() == "CHECKPOINT: schema_compiled"
        assert record.extra["checkpoint"] == "schema_compiled"
        assert record.extra["data"] == {"tables": 4}
