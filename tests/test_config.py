# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Tests - Run configuration
# PURPOSE: Verify override-map parsing, env fallbacks, validation
# CREATED: 16 OCT 2026
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import pytest

from core.config import ConnectionSettings, GeneratorConfig, parse_deplural_map
from core.errors import ConfigurationError

ENV_VARS = [
    "POSTGRES_USER", "POSTGRES_DB", "POSTGRES_HOST", "POSTGRES_PORT",
    "POSTGRES_PASSWORD", "POSTGRES_SSLMODE", "DATABASE_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDeplural:
    def test_single_value(self):
        assert parse_deplural_map(["commas:comma,colons:colon"]) == {
            "commas": "comma",
            "colons": "colon",
        }

    def test_repeated_values_merge(self):
        assert parse_deplural_map(["people:person", "data:datum"]) == {
            "people": "person",
            "data": "datum",
        }

    def test_lowercased_and_stripped(self):
        assert parse_deplural_map([" People : Person "]) == {"people": "person"}

    def test_later_pair_wins(self):
        assert parse_deplural_map(["mice:mouse", "mice:mice"]) == {"mice": "mice"}

    def test_nothing_given(self):
        assert parse_deplural_map([]) == {}
        assert parse_deplural_map(None) == {}

    @pytest.mark.parametrize("bad", ["people", "people:", ":person", "a:b,,c:d"])
    def test_malformed_pair_rejected(self, bad):
        with pytest.raises(ConfigurationError, match="plural:singular"):
            parse_deplural_map([bad])


class TestConnectionSettings:
    def test_from_env(self, clean_env):
        clean_env.setenv("POSTGRES_USER", "app")
        clean_env.setenv("POSTGRES_DB", "shop")
        clean_env.setenv("POSTGRES_PORT", "6543")
        settings = ConnectionSettings.from_env()
        assert settings.user == "app"
        assert settings.dbname == "shop"
        assert settings.port == 6543
        assert settings.sslmode == "prefer"
        assert settings.dsn is None

    def test_overrides_win_unless_none(self, clean_env):
        clean_env.setenv("POSTGRES_DB", "shop")
        clean_env.setenv("POSTGRES_USER", "app")
        settings = ConnectionSettings.from_env(dbname="inventory", user=None)
        assert settings.dbname == "inventory"
        assert settings.user == "app"

    def test_validate_requires_database(self, clean_env):
        with pytest.raises(ConfigurationError):
            ConnectionSettings.from_env().validate()

    def test_dsn_is_enough(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql://app@db/shop")
        ConnectionSettings.from_env().validate()

    def test_frozen(self):
        settings = ConnectionSettings(dbname="shop")
        with pytest.raises(AttributeError):
            settings.dbname = "other"


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.package_name == "models"
        assert dict(config.deplural) == {}
        assert config.tables == ()
        assert not config.strict_tables
        assert not config.strict_keys
        config.validate()

    @pytest.mark.parametrize("name", ["my-models", "1models", ""])
    def test_invalid_package_name(self, name):
        with pytest.raises(ConfigurationError):
            GeneratorConfig(package_name=name).validate()
