"""
Configuration tests.

Run with: pytest tests/test_config.py -v
"""

import json
import logging

import pytest
import yaml

from xsdguard.config.settings import (
    GuardConfig,
    get_config,
    load_config,
    save_config,
    set_config,
    validate_config,
)


class TestGuardConfig:
    """Tests for GuardConfig defaults and conversion."""

    def test_defaults(self):
        """Engine calls are serialized and entities unresolved by default."""
        config = GuardConfig()
        assert config.engine.serialize_engine_calls is True
        assert config.parser.resolve_entities is False
        assert config.parser.no_network is True
        assert config.parser.max_document_bytes == 0
        assert config.cache.enabled is True

    def test_from_dict_keeps_missing_sections(self):
        config = GuardConfig.from_dict({"parser": {"max_document_bytes": 100}})
        assert config.parser.max_document_bytes == 100
        assert config.engine.serialize_engine_calls is True
        assert config.log_level == "INFO"

    def test_dict_round_trip(self):
        config = GuardConfig()
        config.api.schema_dir = "/srv/schemas"
        config.cache.max_entries = 4
        assert GuardConfig.from_dict(config.to_dict()) == config

    def test_unknown_key_rejected(self):
        with pytest.raises(TypeError):
            GuardConfig.from_dict({"engine": {"threads": 4}})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("XSDGUARD_SERIALIZE", "false")
        monkeypatch.setenv("XSDGUARD_MAX_DOCUMENT_BYTES", "2048")
        monkeypatch.setenv("XSDGUARD_SCHEMA_DIR", "/tmp/schemas")
        monkeypatch.setenv("XSDGUARD_API_PORT", "9000")
        monkeypatch.setenv("XSDGUARD_LOG_LEVEL", "debug")

        config = GuardConfig.from_env()
        assert config.engine.serialize_engine_calls is False
        assert config.parser.max_document_bytes == 2048
        assert config.api.schema_dir == "/tmp/schemas"
        assert config.api.port == 9000
        assert config.log_level == "DEBUG"

    def test_from_env_ignores_malformed_integers(self, monkeypatch, caplog):
        """A non-integer value keeps the default and logs a warning."""
        monkeypatch.setenv("XSDGUARD_MAX_DOCUMENT_BYTES", "10k")
        monkeypatch.setenv("XSDGUARD_CACHE_SIZE", "many")
        monkeypatch.setenv("XSDGUARD_API_PORT", "http")

        with caplog.at_level(logging.WARNING, logger="xsdguard.config.settings"):
            config = GuardConfig.from_env()

        defaults = GuardConfig()
        assert config.parser.max_document_bytes == defaults.parser.max_document_bytes
        assert config.cache.max_entries == defaults.cache.max_entries
        assert config.api.port == defaults.api.port
        assert "XSDGUARD_API_PORT" in caplog.text


class TestConfigFiles:
    """Tests for load_config / save_config."""

    @pytest.mark.parametrize("suffix", [".json", ".yaml", ".yml"])
    def test_save_and_load(self, tmp_path, suffix):
        config = GuardConfig()
        config.parser.huge_tree = True
        path = tmp_path / "nested" / f"xsdguard{suffix}"

        save_config(config, path)
        assert load_config(path) == config

    def test_json_file_is_plain_json(self, tmp_path):
        path = tmp_path / "config.json"
        save_config(GuardConfig(), path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["engine"]["serialize_engine_calls"] is True

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"cache": {"enabled": False, "max_entries": 2}}), encoding="utf-8")
        config = load_config(path)
        assert config.cache.enabled is False
        assert config.parser.no_network is True

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == GuardConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[engine]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)
        with pytest.raises(ValueError):
            save_config(GuardConfig(), path)


class TestValidateConfig:
    """Tests for validate_config."""

    def test_default_is_clean(self):
        assert validate_config(GuardConfig()) == []

    def test_reports_problems(self):
        config = GuardConfig()
        config.parser.max_document_bytes = -1
        config.cache.max_entries = 0
        config.api.port = 70000
        config.log_level = "chatty"
        assert len(validate_config(config)) == 4


class TestGlobalConfig:
    """Tests for get_config / set_config."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = GuardConfig(log_level="WARNING")
        set_config(config)
        assert get_config() is config
