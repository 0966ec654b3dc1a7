"""
Tests for ConfigManager and ProviderSetting.
"""

import pytest

from solarprognose.config import ConfigManager, ProviderSetting
from solarprognose.errors import ConfigurationError

CONFIG_YAML = """\
solarprognose:
  token: "12345"
  elementid: "0815"
  algorithm: own-v1
time_zone: UTC
log_level: debug
"""


def test_missing_config_file_creates_defaults(tmp_path):
    """
    Without config.yaml a default file is written and the program exits.
    """
    with pytest.raises(SystemExit) as excinfo:
        ConfigManager(str(tmp_path))
    assert excinfo.value.code == 0
    content = (tmp_path / "config.yaml").read_text(encoding="utf-8")
    assert "www.solarprognose.de" in content
    assert "mosmix" in content


def test_load_merges_defaults(tmp_path):
    """
    Values from the file override the defaults of the same section only.
    """
    (tmp_path / "config.yaml").write_text(CONFIG_YAML, encoding="utf-8")
    config_manager = ConfigManager(str(tmp_path))

    section = config_manager.config["solarprognose"]
    assert section["token"] == "12345"
    assert section["algorithm"] == "own-v1"
    assert section["item"] == "plant"
    assert section["read_timeout_ms"] == 5000
    assert config_manager.config["time_zone"] == "UTC"
    assert config_manager.config["activity"]["start"] == "02:00"


def test_get_provider_setting(tmp_path):
    """
    The provider setting is built from the solarprognose section.
    """
    (tmp_path / "config.yaml").write_text(CONFIG_YAML, encoding="utf-8")
    setting = ConfigManager(str(tmp_path)).get_provider_setting()

    assert setting.provider_host == "www.solarprognose.de"
    assert setting.read_timeout_seconds == 5.0
    assert setting.get_configuration_value_as_string("elementid") == "0815"
    assert setting.get_configuration_value_as_string("algorithm") == "own-v1"
    setting.validate()


def test_default_setting():
    """
    Defaults of the provider: mosmix, plant, www.solarprognose.de, 5000 ms.
    """
    setting = ProviderSetting.default()
    assert setting.get_configuration_value_as_string("algorithm") == "mosmix"
    assert setting.get_configuration_value_as_string("item") == "plant"
    assert setting.get_configuration_value_as_string("token") is None
    assert setting.provider_host == "www.solarprognose.de"
    assert setting.read_timeout_ms == 5000


def test_validate_reports_missing_parameters():
    """
    token and elementid are required.
    """
    with pytest.raises(ConfigurationError, match="token, elementid"):
        ProviderSetting.default().validate()


@pytest.mark.parametrize(
    "key, value",
    [("elementid", "abc"), ("algorithm", "magic")],
)
def test_validate_rejects_invalid_values(provider_setting, key, value):
    """
    elementid must be numeric and the algorithm one of the known options.
    """
    provider_setting.set_configuration_value(key, value)
    with pytest.raises(ConfigurationError):
        provider_setting.validate()


def test_validate_rejects_invalid_timeout(provider_setting):
    """
    The read timeout must be a positive number of milliseconds.
    """
    provider_setting.read_timeout_ms = 0
    with pytest.raises(ConfigurationError):
        provider_setting.validate()


def test_repr_hides_token(provider_setting):
    """
    The access token never shows up in logs of the setting.
    """
    assert "12345" not in repr(provider_setting)
