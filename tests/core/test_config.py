"""Tests for zakatkit.core.config."""

import json
import os

import pytest
import yaml

from zakatkit.core.config import Config, get_config, read_settings_file, reset_config
from zakatkit.core.exceptions import ConfigurationError


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("zakat.rate_percent") == 2.5
        assert config.get("reminders.hawl_days_before") == 7
        assert config.get("reminders.pre_ramadan_days_before") == 14
        assert config.get("reminders.recurring_count") == 4
        assert config.get("assets.property_revaluation_days") == 365
        assert config.get("prices.gold_per_gram") is None
        assert config.get("user.nisab_method") == "GOLD"

    def test_yaml_config_file(self, tmp_config_file):
        config = Config(config_file=tmp_config_file)
        assert config.get("prices.gold_per_gram") == 60
        # untouched defaults survive the merge
        assert config.get("reminders.hawl_days_before") == 7

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"zakat": {"rate_percent": 2.577}}, f)

        config = Config(config_file=config_path)
        assert config.get("zakat.rate_percent") == 2.577

    def test_env_overrides_file(self, tmp_config_file, monkeypatch):
        monkeypatch.setenv("ZAKATKIT_PRICES__GOLD_PER_GRAM", "92.5")
        config = Config(config_file=tmp_config_file)
        assert config.get("prices.gold_per_gram") == 92.5

    def test_custom_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_USER__CURRENCY", "EUR")
        config = Config(env_prefix="MYAPP_")
        assert config.get("user.currency") == "EUR"

    def test_extra_defaults(self):
        config = Config(defaults={"prices": {"silver_per_gram": 0.9}})
        assert config.get("prices.silver_per_gram") == 0.9
        assert config.get("prices.gold_per_gram") is None

    def test_missing_file_raises(self, tmp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            Config(config_file=os.path.join(tmp_dir, "missing.yaml"))

    def test_unsupported_extension_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.toml")
        with open(config_path, "w") as f:
            f.write("[zakat]\n")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            Config(config_file=config_path)

    def test_non_mapping_file_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump([1, 2, 3], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=config_path)

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self):
        config = Config()
        config.set("prices.gold_per_gram", 75)
        config.set("custom.nested.key", "value")
        assert config.get("prices.gold_per_gram") == 75
        assert config.get("custom.nested.key") == "value"

    def test_env_values_are_typed(self, monkeypatch):
        monkeypatch.setenv("ZAKATKIT_REMINDERS__HAWL_DAYS_BEFORE", "10")
        monkeypatch.setenv("ZAKATKIT_PRICES__SILVER_PER_GRAM", "null")
        monkeypatch.setenv("ZAKATKIT_USER__CURRENCY", "EUR")
        monkeypatch.setenv("ZAKATKIT_USER__TAGS", "[a, b]")
        config = Config()
        assert config.get("reminders.hawl_days_before") == 10
        assert config.get("prices.silver_per_gram") is None
        assert config.get("user.currency") == "EUR"
        assert config.get("user.tags") == "[a, b]"

    def test_empty_prefix_ignores_environment(self, monkeypatch):
        monkeypatch.setenv("ZAKATKIT_USER__CURRENCY", "EUR")
        assert Config(env_prefix="").get("user.currency") == "USD"

    def test_section(self):
        config = Config()
        assert config.section("reminders")["recurring_count"] == 4
        assert config.section("missing") == {}

    def test_to_dict_is_a_copy(self):
        config = Config()
        data = config.to_dict()
        data["zakat"]["rate_percent"] = 99
        assert config.get("zakat.rate_percent") == 2.5

    def test_defaults_are_not_shared(self):
        Config().set("zakat.rate_percent", 10)
        assert Config().get("zakat.rate_percent") == 2.5

    def test_malformed_yaml_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("zakat: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            Config(config_file=config_path)

    def test_empty_file_reads_as_no_settings(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "empty.yaml")
        open(config_path, "w").close()
        assert read_settings_file(config_path) == {}


class TestSingleton:
    def test_get_config_returns_same_instance(self):
        assert get_config() is get_config()

    def test_reset_config(self):
        c1 = get_config()
        reset_config()
        assert get_config() is not c1
