"""Tests for connection settings and response records."""

import pytest

from ravenrest import CompiledQuery, ConfigurationError, ConnectionSettings, DatabaseInfo


class TestConnectionSettings:
    def test_strips_trailing_slash(self):
        settings = ConnectionSettings("http://localhost:81/")
        assert settings.host == "http://localhost:81"
        assert settings.database is None
        assert settings.timeout == 30.0

    @pytest.mark.parametrize("value", [None, "http://localhost:81", 42])
    def test_coerce_rejects_non_settings(self, value):
        with pytest.raises(ConfigurationError):
            ConnectionSettings.coerce(value)

    def test_coerce_mapping(self):
        settings = ConnectionSettings.coerce({"host": "http://db:81", "database": "foo"})
        assert settings == ConnectionSettings("http://db:81", "foo")

    def test_coerce_mapping_without_host(self):
        with pytest.raises(ConfigurationError, match="host"):
            ConnectionSettings.coerce({"database": "foo"})

    def test_empty_host(self):
        with pytest.raises(ConfigurationError):
            ConnectionSettings("  ")

    def test_coerce_returns_same_instance(self):
        settings = ConnectionSettings("http://db:81")
        assert ConnectionSettings.coerce(settings) is settings


class TestCompiledQuery:
    def test_url_without_params(self):
        assert CompiledQuery("indexes/dynamic/Users").url == "indexes/dynamic/Users"

    def test_url_repeats_list_params(self):
        compiled = CompiledQuery("indexes/Users", {"fetch": ["Name", "Age"], "pageSize": 5})
        assert compiled.url == "indexes/Users?fetch=Name&fetch=Age&pageSize=5"


def test_database_info_from_response():
    info = DatabaseInfo.from_response(
        {
            "@metadata": {"@id": "Raven/Databases/abc", "@etag": "0000-000-001"},
            "Last-Modified": "2012-06-16T04:12:35.9130000",
            "Settings": {"Raven/DataDir": "~/Tennants/Test"},
        }
    )
    assert info.id == "Raven/Databases/abc"
    assert info.name == "abc"
    assert info.last_modified == "2012-06-16T04:12:35.9130000"
    assert info.data_directory == "~/Tennants/Test"


def test_database_info_missing_fields():
    info = DatabaseInfo.from_response({"@metadata": {"@id": "plain"}})
    assert info.name == "plain"
    assert info.last_modified is None
    assert info.data_directory is None
