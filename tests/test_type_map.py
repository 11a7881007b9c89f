# ============================================================================
# TYPE MAPPER TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - udt_name mapping
# PURPOSE: Verify nullability wrapping, shims, placeholders, import flags
# CREATED: 16 OCT 2026
# ============================================================================
"""
Type Mapper Tests

Run with:
    pytest tests/test_type_map.py -v
"""

import pytest

from core.schema.type_map import ImportGroup, TYPE_MAP, TypeMapper, TypeSpec


class TestMapping:
    @pytest.mark.parametrize("udt,expected", [
        ("int4", "int"),
        ("int8", "int"),
        ("bool", "bool"),
        ("bytea", "bytes"),
        ("float8", "float"),
        ("varchar", "str"),
        ("uuid", "str"),
        ("timestamptz", "datetime.datetime"),
        ("date", "datetime.date"),
        ("timetz", "datetime.time"),
    ])
    def test_known_types(self, udt, expected):
        mapped = TypeMapper().map(udt, nullable=False)
        assert mapped.type_name == expected
        assert not mapped.unmapped

    @pytest.mark.parametrize("udt", sorted(TYPE_MAP))
    def test_nullable_always_wrapped(self, udt):
        mapper = TypeMapper()
        assert mapper.map(udt, nullable=True).type_name.startswith("Optional[")
        assert not mapper.map(udt, nullable=False).type_name.startswith("Optional[")

    def test_unknown_type_placeholder(self):
        mapped = TypeMapper().map("tsvector", nullable=False)
        assert mapped.type_name == "FIXME_tsvector"
        assert mapped.unmapped
        assert mapped.import_group is None

    def test_unknown_nullable_placeholder_wrapped(self):
        mapped = TypeMapper().map("interval", nullable=True)
        assert mapped.type_name == "Optional[FIXME_interval]"


class TestShim:
    def test_inet_uses_string_shim(self):
        mapped = TypeMapper().map("inet", nullable=False)
        assert mapped.needs_shim
        assert mapped.shim_type == "str"
        assert mapped.shim_parser == "ipaddress.ip_interface"

    def test_nullable_shim_wrapped_like_type(self):
        mapped = TypeMapper().map("cidr", nullable=True)
        assert mapped.type_name.startswith("Optional[")
        assert mapped.shim_type == "Optional[str]"

    def test_plain_types_have_no_shim(self):
        mapped = TypeMapper().map("text", nullable=True)
        assert not mapped.needs_shim
        assert mapped.shim_type is None


class TestImports:
    def test_no_imports_by_default(self):
        mapper = TypeMapper()
        mapper.map("int4", nullable=False)
        mapper.map("text", nullable=True)
        assert mapper.other_imports == []

    def test_time_and_net_recorded_once(self):
        mapper = TypeMapper()
        mapper.map("inet", nullable=False)
        mapper.map("timestamp", nullable=True)
        mapper.map("date", nullable=False)
        assert mapper.use_time and mapper.use_net
        assert mapper.other_imports == ["datetime", "ipaddress"]

    def test_unknown_type_sets_no_flags(self):
        mapper = TypeMapper()
        mapper.map("tsquery", nullable=False)
        assert not mapper.use_time and not mapper.use_net

    def test_custom_type_map(self):
        mapper = TypeMapper({"citext": TypeSpec("str")})
        assert mapper.map("citext", nullable=False).type_name == "str"
        assert mapper.map("int4", nullable=False).unmapped

    def test_import_group_values(self):
        assert ImportGroup.TIME.value == "datetime"
        assert ImportGroup.NET.value == "ipaddress"
