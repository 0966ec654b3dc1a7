"""
This module provides the ConfigManager class for managing configuration settings
of the plugin and the ProviderSetting the provider reads on every request. The
configuration settings are stored in a 'config.yaml' file.
"""

import os
import sys
import logging
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from .constants import (
    ALGORITHM,
    ALGORITHM_OPTIONS,
    DEFAULT_ALGORITHM,
    DEFAULT_ITEM,
    DEFAULT_LOCALE,
    DEFAULT_PROVIDER_HOST,
    DEFAULT_PROVIDER_PORT,
    DEFAULT_READ_TIMEOUT_MS,
    ELEMENTID,
    ITEM,
    TOKEN,
)
from .errors import ConfigurationError

logger = logging.getLogger("__main__")
logger.info("[Config] loading module ")


class ProviderSetting:
    """
    Connection settings plus the free form configuration values of one provider
    instance. A setting is read once per request and not modified by the provider.
    """

    def __init__(
        self,
        provider_host=DEFAULT_PROVIDER_HOST,
        provider_port=DEFAULT_PROVIDER_PORT,
        read_timeout_ms=DEFAULT_READ_TIMEOUT_MS,
        configuration=None,
    ):
        self.provider_host = provider_host
        self.provider_port = provider_port
        self.read_timeout_ms = read_timeout_ms
        self.configuration = dict(configuration or {})

    @classmethod
    def default(cls):
        """
        Returns the default setting of the Solarprognose provider.
        """
        return cls(
            provider_host=DEFAULT_PROVIDER_HOST,
            read_timeout_ms=DEFAULT_READ_TIMEOUT_MS,
            configuration={ALGORITHM: DEFAULT_ALGORITHM, ITEM: DEFAULT_ITEM},
        )

    def set_configuration_value(self, key, value):
        self.configuration[key] = value

    def get_configuration_value_as_string(self, key):
        """
        Returns the configuration value as string or None if it is not set.
        """
        value = self.configuration.get(key)
        if value is None:
            return None
        return str(value)

    @property
    def read_timeout_seconds(self):
        return self.read_timeout_ms / 1000.0

    def validate(self):
        """
        Checks the setting for required parameters.

        Raises:
            ConfigurationError: If a required parameter is missing or invalid.
        """
        missing = []
        if not str(self.provider_host or "").strip():
            missing.append("provider_host")
        if not (self.get_configuration_value_as_string(TOKEN) or "").strip():
            missing.append(TOKEN)
        elementid = (self.get_configuration_value_as_string(ELEMENTID) or "").strip()
        if not elementid:
            missing.append(ELEMENTID)
        if missing:
            raise ConfigurationError(
                f"[Config] Missing required parameters: {', '.join(missing)}"
            )
        try:
            float(elementid)
        except ValueError as e:
            raise ConfigurationError(
                f"[Config] '{ELEMENTID}' must be numeric, got '{elementid}'"
            ) from e
        algorithm = self.get_configuration_value_as_string(ALGORITHM) or ""
        if algorithm not in ALGORITHM_OPTIONS:
            raise ConfigurationError(
                f"[Config] Unknown algorithm '{algorithm}' - "
                + f"use one of {', '.join(repr(a) for a in ALGORITHM_OPTIONS)}"
            )
        try:
            if int(self.read_timeout_ms) <= 0:
                raise ValueError(self.read_timeout_ms)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"[Config] Invalid read timeout: {self.read_timeout_ms!r}"
            ) from e

    def __repr__(self):
        # the token is a secret
        shown = {
            key: ("***" if key == TOKEN and value else value)
            for key, value in self.configuration.items()
        }
        return (
            f"ProviderSetting(provider_host={self.provider_host!r}, "
            f"provider_port={self.provider_port!r}, "
            f"read_timeout_ms={self.read_timeout_ms!r}, configuration={shown!r})"
        )


class ConfigManager:
    """
    Manages the configuration settings for the plugin.

    This class handles loading, updating, and saving configuration settings from a 'config.yaml'
    file. If the configuration file does not exist, it creates one with default values and
    prompts the user to restart after configuring the settings.
    """

    def __init__(self, given_dir):
        self.current_dir = given_dir
        self.config_file = os.path.join(self.current_dir, "config.yaml")
        self.yaml = YAML()
        self.yaml.default_flow_style = False
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.preserve_quotes = True
        self.default_config = self.create_default_config()
        self.config = self.default_config.copy()
        self.load_config()

    def create_default_config(self):
        """
        Creates the default configuration with comments.
        """
        config = CommentedMap(
            {
                "solarprognose": CommentedMap(
                    {
                        "provider_host": DEFAULT_PROVIDER_HOST,
                        "provider_port": DEFAULT_PROVIDER_PORT,
                        "read_timeout_ms": DEFAULT_READ_TIMEOUT_MS,
                        "token": "",  # access token from solarprognose.de
                        "elementid": "",  # id of the plant / inverter / module field
                        "item": DEFAULT_ITEM,
                        "algorithm": DEFAULT_ALGORITHM,
                        "locale": DEFAULT_LOCALE,
                    }
                ),
                "activity": CommentedMap(
                    {
                        "start": "02:00",
                        "end": "21:00",
                        "interval_hours": 1,
                    }
                ),
                "time_zone": "Europe/Berlin",  # Add default time zone
                "log_level": "info",  # Default log level
            }
        )
        config.yaml_set_comment_before_after_key(
            "solarprognose", before="Solarprognose provider configuration"
        )
        config["solarprognose"].yaml_add_eol_comment(
            "host of the Solarprognose API - default: www.solarprognose.de",
            "provider_host",
        )
        config["solarprognose"].yaml_add_eol_comment(
            "read timeout in milliseconds - default: 5000", "read_timeout_ms"
        )
        config["solarprognose"].yaml_add_eol_comment(
            "access token (required)", "token"
        )
        config["solarprognose"].yaml_add_eol_comment(
            "numeric id of the element to forecast (required)", "elementid"
        )
        config["solarprognose"].yaml_add_eol_comment(
            "item type: plant, inverter or module_field - default: plant", "item"
        )
        config["solarprognose"].yaml_add_eol_comment(
            'forecast algorithm: "", own-v1, mosmix - default: mosmix', "algorithm"
        )
        config["solarprognose"].yaml_add_eol_comment(
            "language of user facing messages: en, de - default: en", "locale"
        )
        config.yaml_set_comment_before_after_key(
            "activity", before="Polling window and interval (local time)"
        )
        config.yaml_add_eol_comment(
            "Default time zone - default: Europe/Berlin", "time_zone"
        )
        config.yaml_add_eol_comment(
            "Log level for the plugin : debug, info, warning, error - default: info",
            "log_level",
        )
        return config

    def load_config(self):
        """
        Reads the configuration from 'config.yaml' file located in the current directory.
        If the file exists, it loads the configuration values.
        If the file does not exist, it creates a new 'config.yaml' file with default values and
        prompts the user to restart after configuring the settings.
        """
        if os.path.exists(self.config_file):
            with open(self.config_file, "r", encoding="utf-8") as f:
                loaded = self.yaml.load(f)
            if loaded:
                for key, value in loaded.items():
                    if isinstance(value, dict) and isinstance(
                        self.config.get(key), dict
                    ):
                        merged = CommentedMap(self.default_config[key])
                        merged.update(value)
                        self.config[key] = merged
                    else:
                        self.config[key] = value
        else:
            self.write_config()
            print("Config file not found. Created a new one with default values.")
            print(
                "Please restart after configuring the settings in config.yaml"
            )
            sys.exit(0)

    def write_config(self):
        """
        Writes the configuration to 'config.yaml' file located in the current directory.
        """
        logger.info("[Config] writing config file")
        with open(self.config_file, "w", encoding="utf-8") as config_file_handle:
            self.yaml.dump(self.config, config_file_handle)

    def get_provider_setting(self):
        """
        Builds the ProviderSetting from the 'solarprognose' section.
        """
        section = self.config["solarprognose"]
        return ProviderSetting(
            provider_host=section.get("provider_host", DEFAULT_PROVIDER_HOST),
            provider_port=section.get("provider_port", DEFAULT_PROVIDER_PORT),
            read_timeout_ms=section.get("read_timeout_ms", DEFAULT_READ_TIMEOUT_MS),
            configuration={
                TOKEN: section.get("token"),
                ELEMENTID: section.get("elementid"),
                ITEM: section.get("item", DEFAULT_ITEM),
                ALGORITHM: section.get("algorithm", DEFAULT_ALGORITHM),
            },
        )
