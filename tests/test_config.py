"""Tests for config.py - JSON file and environment configuration."""

import json

import pytest

from live_scoreboard.config import ScoreboardConfig

ENV_VARS = (
    "BOARD_NAME",
    "HOST",
    "SOCKET_PORT",
    "WEB_PORT",
    "WEB_ENABLED",
    "TCP_ENABLED",
    "MAX_NAME_LENGTH",
    "MAX_MESSAGE_BYTES",
    "MAX_SUMMARY_ENTRIES",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Defaults when no file and no environment are given."""

    def test_defaults_without_path(self):
        config = ScoreboardConfig()
        assert config.get("board_name") == "Live Scoreboard"
        assert config.get("server", "socket_port") == 8080
        assert config.get("server", "web_port") == 8081
        assert config.get("logging", "level") == "INFO"

    def test_missing_file_is_not_created(self, tmp_path):
        path = tmp_path / "board.json"
        config = ScoreboardConfig(str(path))
        assert config.get("ui", "max_summary_entries") == 100
        assert not path.exists()

    def test_defaults_are_not_shared_between_instances(self):
        first = ScoreboardConfig()
        first.config["server"]["web_port"] = 9999
        assert ScoreboardConfig().get("server", "web_port") == 8081

    def test_get_unknown_key_returns_none(self):
        config = ScoreboardConfig()
        assert config.get("server", "nope") is None
        assert config.get("board_name", "deeper") is None


class TestFileAndEnv:
    """Loading from JSON and applying environment overrides."""

    def test_file_is_deep_merged(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({"board_name": "Cup", "server": {"web_port": 9000}}))

        config = ScoreboardConfig(str(path))

        assert config.get("board_name") == "Cup"
        assert config.get("server", "web_port") == 9000
        assert config.get("server", "socket_port") == 8080

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text("{not json")
        assert ScoreboardConfig(str(path)).get("board_name") == "Live Scoreboard"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({"server": {"socket_port": 7000}}))
        monkeypatch.setenv("SOCKET_PORT", "7100")
        monkeypatch.setenv("WEB_ENABLED", "false")
        monkeypatch.setenv("BOARD_NAME", "Derby Day")

        config = ScoreboardConfig(str(path))

        assert config.get("server", "socket_port") == 7100
        assert config.is_feature_enabled("web_enabled") is False
        assert config.is_feature_enabled("tcp_enabled") is True
        assert config.get("board_name") == "Derby Day"

    def test_port_zero_stays_an_integer(self, monkeypatch):
        monkeypatch.setenv("WEB_PORT", "0")
        assert ScoreboardConfig().get("server", "web_port") == 0


class TestValidation:
    """Invalid values are replaced with defaults."""

    def test_invalid_values_reset(self, tmp_path, caplog):
        path = tmp_path / "board.json"
        path.write_text(
            json.dumps(
                {
                    "server": {"socket_port": 70000},
                    "protocol": {"max_name_length": 0},
                    "ui": {"max_summary_entries": "lots"},
                    "logging": {"level": "chatty"},
                }
            )
        )

        config = ScoreboardConfig(str(path))

        assert config.get("server", "socket_port") == 8080
        assert config.get("protocol", "max_name_length") == 30
        assert config.get("ui", "max_summary_entries") == 100
        assert config.get("logging", "level") == "INFO"
        assert "Invalid server.socket_port" in caplog.text

    def test_scalar_section_is_replaced(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({"server": "oops", "extra": {"kept": 1}}))

        config = ScoreboardConfig(str(path))

        assert config.get("server", "socket_port") == 8080
        assert config.get("server", "host") == "0.0.0.0"
        assert config.get("server", "web_port") == 8081
        assert config.get("extra", "kept") == 1

    def test_log_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert ScoreboardConfig().get("logging", "level") == "DEBUG"


class TestSave:
    """Saving configuration to disk."""

    def test_save_round_trips(self, tmp_path):
        path = tmp_path / "board.json"
        config = ScoreboardConfig(str(path))
        config.config["board_name"] = "Saved"

        assert config.save_config() is True
        assert ScoreboardConfig(str(path)).get("board_name") == "Saved"

    def test_save_without_path(self):
        assert ScoreboardConfig().save_config() is False
