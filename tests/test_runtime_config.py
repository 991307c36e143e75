"""Tests for runtime config env parsing."""
import os
from unittest.mock import patch

import pytest

from runtime.runtime_config import (
    DEFAULT_TIMEOUT,
    _parse_env_bool,
    _read_env_int,
    load_runtime_config,
)

OVIRT_ENV = (
    "OVIRT_URL",
    "OVIRT_USERNAME",
    "OVIRT_PASSWORD",
    "OVIRT_CA_FILE",
    "OVIRT_VERIFY_SSL",
    "OVIRT_TIMEOUT",
    "DEBUG_TRANSPORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in OVIRT_ENV:
        monkeypatch.delenv(key, raising=False)


class TestRuntimeConfig:
    @patch.dict(
        os.environ,
        {
            "OVIRT_URL": '"https://engine.example.com/ovirt-engine/api/"',
            "OVIRT_USERNAME": "admin@internal",
            "OVIRT_PASSWORD": "'secret'",
        },
        clear=False,
    )
    def test_values_are_unquoted_and_url_trimmed(self):
        config = load_runtime_config()
        assert config["OVIRT"]["URL"] == "https://engine.example.com/ovirt-engine/api"
        assert config["OVIRT"]["USERNAME"] == "admin@internal"
        assert config["OVIRT"]["PASSWORD"] == "secret"

    def test_defaults_when_unset(self):
        config = load_runtime_config()["OVIRT"]
        assert config["URL"] == ""
        assert config["CA_FILE"] is None
        assert config["VERIFY_SSL"] is True
        assert config["TIMEOUT"] == DEFAULT_TIMEOUT
        assert config["DEBUG_TRANSPORT"] is False

    @patch.dict(os.environ, {"OVIRT_VERIFY_SSL": "false", "DEBUG_TRANSPORT": "yes"}, clear=False)
    def test_boolean_flags(self):
        config = load_runtime_config()["OVIRT"]
        assert config["VERIFY_SSL"] is False
        assert config["DEBUG_TRANSPORT"] is True

    @patch.dict(os.environ, {"OVIRT_URL": "engine.example.com/ovirt-engine/api"}, clear=False)
    def test_url_without_scheme_is_rejected(self):
        with pytest.raises(ValueError, match="http"):
            load_runtime_config()

    @patch.dict(os.environ, {"OVIRT_CA_FILE": "/nonexistent/ca.pem"}, clear=False)
    def test_missing_ca_file_is_rejected(self):
        with pytest.raises(ValueError, match="OVIRT_CA_FILE"):
            load_runtime_config()

    def test_existing_ca_file_is_kept(self, tmp_path, monkeypatch):
        ca_file = tmp_path / "ca.pem"
        ca_file.write_text("-----BEGIN CERTIFICATE-----\n")
        monkeypatch.setenv("OVIRT_CA_FILE", str(ca_file))
        assert load_runtime_config()["OVIRT"]["CA_FILE"] == str(ca_file)


class TestEnvParsing:
    def test_parse_env_bool_invalid_uses_default(self):
        assert _parse_env_bool("maybe", default=True) is True
        assert _parse_env_bool("maybe", default=False) is False

    def test_parse_env_bool_blank_uses_default(self):
        assert _parse_env_bool("  ", default=True) is True
        assert _parse_env_bool('"off"', default=True) is False

    @patch.dict(os.environ, {"OVIRT_TIMEOUT": "0"}, clear=False)
    def test_read_env_int_below_minimum_uses_default(self):
        assert _read_env_int("OVIRT_TIMEOUT", default=30, minimum=1) == 30

    @patch.dict(os.environ, {"OVIRT_TIMEOUT": "abc"}, clear=False)
    def test_read_env_int_invalid_uses_default(self):
        assert _read_env_int("OVIRT_TIMEOUT", default=30, minimum=1) == 30

    @patch.dict(os.environ, {"OVIRT_TIMEOUT": " '45' "}, clear=False)
    def test_read_env_int_strips_quotes(self):
        assert _read_env_int("OVIRT_TIMEOUT", default=30, minimum=1) == 45
