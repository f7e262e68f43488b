"""
Configuration management for the live scoreboard.
Supports both JSON file configuration and environment variable overrides.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

logger = logging.getLogger(__name__)


def _merge_into(target: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    """Merge ``overrides`` into ``target``, descending into sections present in both."""
    for key, value in overrides.items():
        section = target.get(key)
        if isinstance(section, dict) and isinstance(value, dict):
            _merge_into(section, value)
        else:
            target[key] = value


def _assign(config: Dict[str, Any], path: Tuple[str, ...], value: Any) -> None:
    *sections, name = path
    for section in sections:
        child = config.get(section)
        if not isinstance(child, dict):
            child = config[section] = {}
        config = child
    config[name] = value


class ScoreboardConfig:
    """Configuration management for the live scoreboard."""

    DEFAULT_CONFIG = {
        "board_name": "Live Scoreboard",
        "server": {
            "host": "0.0.0.0",
            "socket_port": 8080,
            "web_port": 8081,
        },
        "features": {
            "web_enabled": True,
            "tcp_enabled": True,
        },
        "protocol": {
            "max_name_length": 30,
            "max_message_bytes": 1024,
        },
        "ui": {
            "max_summary_entries": 100,
        },
        "logging": {
            "level": "INFO",
        },
    }

    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    def __init__(
        self,
        config_path: Optional[str] = None,
    ) -> None:
        """Initialize configuration from file, environment variables, or defaults."""
        self.config_path = Path(config_path) if config_path else None
        self.config = self._load_config()
        self._apply_env_overrides()
        self._validate_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from JSON file, falling back to defaults.

        @return: Dictionary containing the loaded configuration
        """
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path is None or not self.config_path.exists():
            return config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(
                "Error loading config from %s: %s; using defaults", self.config_path, e
            )
            return config

        _merge_into(config, loaded_config)
        return config

    def _apply_env_overrides(self) -> None:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern: SECTION_KEY (e.g., BOARD_NAME, WEB_PORT)
        """
        env_mappings = {
            "BOARD_NAME": ("board_name",),

            # Server
            "HOST": ("server", "host"),
            "SOCKET_PORT": ("server", "socket_port"),
            "WEB_PORT": ("server", "web_port"),

            # Features
            "WEB_ENABLED": ("features", "web_enabled"),
            "TCP_ENABLED": ("features", "tcp_enabled"),

            # Protocol
            "MAX_NAME_LENGTH": ("protocol", "max_name_length"),
            "MAX_MESSAGE_BYTES": ("protocol", "max_message_bytes"),

            # UI
            "MAX_SUMMARY_ENTRIES": ("ui", "max_summary_entries"),

            "LOG_LEVEL": ("logging", "level"),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                _assign(self.config, config_path, self._convert_env_value(env_value))

    def _convert_env_value(self, value: str) -> Any:
        """
        Convert environment variable string to appropriate type.

        @param value: String value from environment variable
        @return: Converted value (bool, int, or string)
        """
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def _reset_to_default(self, *keys: str) -> None:
        default = self.DEFAULT_CONFIG
        for key in keys:
            default = default[key]
        logger.warning(
            "Invalid %s, using %r", ".".join(keys), default
        )
        _assign(self.config, keys, default)

    def _validate_config(self) -> None:
        """
        Validate configuration values.

        Invalid values are logged and replaced with their defaults.
        """
        if not isinstance(self.get("server", "host"), str):
            self._reset_to_default("server", "host")

        for port_key in ("socket_port", "web_port"):
            port = self.get("server", port_key)
            if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 65535:
                self._reset_to_default("server", port_key)

        for section, key in (
            ("protocol", "max_name_length"),
            ("protocol", "max_message_bytes"),
            ("ui", "max_summary_entries"),
        ):
            value = self.get(section, key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                self._reset_to_default(section, key)

        level = self.get("logging", "level")
        if not isinstance(level, str) or level.upper() not in self.LOG_LEVELS:
            self._reset_to_default("logging", "level")
        else:
            self.config["logging"]["level"] = level.upper()

        if not isinstance(self.get("board_name"), str):
            self._reset_to_default("board_name")

    def get(
        self,
        *keys: str,
    ) -> Any:
        """
        Get nested configuration value.

        @param keys: Variable arguments representing nested keys to traverse
        @return: Configuration value at the specified path, None if not found
        """
        node: Any = self.config
        for key in keys:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node

    def is_feature_enabled(
        self,
        feature_name: str,
    ) -> bool:
        """
        Check if a feature is enabled.

        @param feature_name: Name of the feature to check
        @return: True if feature is enabled, False otherwise
        """
        return self.get("features", feature_name) is True

    def save_config(self) -> bool:
        """
        Save current configuration to file.

        @return: True if saved successfully, False on error
        """
        if self.config_path is None:
            logger.warning("No config path set, configuration not saved")
            return False

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2)
            return True
        except IOError as e:
            logger.error("Could not save config file %s: %s", self.config_path, e)
            return False
