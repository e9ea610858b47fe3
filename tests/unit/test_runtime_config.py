"""
Runtime Configuration Unit Tests
Tests for merkle_commit/config/runtime.py and config/log_setup.py
"""
import logging

import pytest

from merkle_commit.config import (
    LOGGER_NAME,
    RuntimeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)
from merkle_commit.merkle.merkle_tree import merkle_root
from merkle_commit.schemas.errors import ConfigurationException


class TestDefaults:
    def test_default_values(self):
        config = RuntimeConfig()

        assert config.text_encoding == "utf-8"
        assert config.logging.level == "WARNING"
        assert config.logging.debug is False

    def test_to_dict(self):
        assert RuntimeConfig().to_dict() == {
            "hashing": {"text_encoding": "utf-8"},
            "logging": {"level": "WARNING", "debug": False},
        }


class TestFromDict:
    def test_partial_data(self):
        config = RuntimeConfig.from_dict({"logging": {"level": "info"}})

        assert config.logging.level == "INFO"
        assert config.text_encoding == "utf-8"

    def test_encoding_normalized(self):
        assert RuntimeConfig.from_dict({"hashing": {"text_encoding": "UTF-16"}}).text_encoding == "utf-16"

    def test_unknown_encoding(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"hashing": {"text_encoding": "klingon"}})

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationException, match="log level"):
            RuntimeConfig.from_dict({"logging": {"level": "LOUD"}})

    def test_unknown_key(self):
        with pytest.raises(ConfigurationException, match="Invalid configuration"):
            RuntimeConfig.from_dict({"hashing": {"algorithm": "md5"}})


class TestFromEnv:
    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("MERKLE_TEXT_ENCODING", "latin-1")
        monkeypatch.setenv("MERKLE_LOG_LEVEL", "error")
        monkeypatch.setenv("MERKLE_DEBUG", "true")

        config = RuntimeConfig.from_env()

        assert config.text_encoding == "iso8859-1"
        assert config.logging.level == "ERROR"
        assert config.logging.debug is True

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig.from_dict({"hashing": {"text_encoding": "latin-1"}, "logging": {"level": "INFO"}})
        monkeypatch.setenv("MERKLE_DEBUG", "1")

        config = base.with_env_overrides()

        assert config.logging.debug is True
        assert config.logging.level == "INFO"
        assert config.text_encoding == "iso8859-1"
        assert base.logging.debug is False

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config


class TestFromYaml:
    def test_load(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text("hashing:\n  text_encoding: utf-8\nlogging:\n  level: DEBUG\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.logging.level == "DEBUG"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")


class TestDefaultConfig:
    def test_cached(self):
        assert get_default_config() is get_default_config()

    def test_default_encoding_drives_leaf_bytes(self):
        utf8_root = merkle_root(["abc", "bcd"])

        set_default_config(RuntimeConfig.from_dict({"hashing": {"text_encoding": "utf-16-le"}}))

        assert merkle_root(["abc", "bcd"]) != utf8_root
        assert merkle_root(["abc", "bcd"]) == merkle_root(
            ["abc".encode("utf-16-le"), "bcd".encode("utf-16-le")]
        )

    def test_explicit_encoding_wins(self):
        set_default_config(RuntimeConfig.from_dict({"hashing": {"text_encoding": "utf-16-le"}}))

        assert merkle_root(["abc"], encoding="utf-8") == merkle_root([b"abc"])


class TestConfigureLogging:
    def test_level_applied(self):
        logger = configure_logging(RuntimeConfig.from_dict({"logging": {"level": "ERROR"}}))

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.ERROR

    def test_debug_forces_debug(self):
        logger = configure_logging(RuntimeConfig.from_dict({"logging": {"level": "ERROR", "debug": True}}))

        assert logger.level == logging.DEBUG

    def test_debug_records_emitted(self, caplog):
        configure_logging(RuntimeConfig.from_dict({"logging": {"debug": True}}))

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            merkle_root(["abc", "bcd", "cde"])

        assert any("3 leaves" in record.getMessage() for record in caplog.records)
