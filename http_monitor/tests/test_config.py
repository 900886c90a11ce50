"""Tests for config loading — YAML files, environment, precedence."""

import pytest

from http_monitor.config import load_config
from http_monitor.errors import ConfigError
from http_monitor.models import Config


def _write(tmp_path, text, name="monitor.yml"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestYaml:
    def test_no_sources_gives_defaults(self):
        assert load_config(env={}) == Config()

    def test_values_are_read(self, tmp_path):
        path = _write(tmp_path, "stats_window: 30\nalert_rate: 5\nstrict_chronology: false\n")
        config = load_config(path, env={})
        assert config.stats_window == 30
        assert config.alert_rate == 5
        assert config.strict_chronology is False
        assert config.alert_window == 120

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, ""), env={}) == Config()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml", env={})

    def test_unknown_field_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="unknown field 'alert_threshold'"):
            load_config(_write(tmp_path, "alert_threshold: 3\n"), env={})

    def test_non_mapping_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- 1\n- 2\n"), env={})

    def test_invalid_yaml_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(_write(tmp_path, "stats_window: [\n"), env={})

    def test_invalid_value_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="alert_window must be positive"):
            load_config(_write(tmp_path, "alert_window: 0\n"), env={})


class TestEnvironment:
    def test_env_values_are_read(self):
        config = load_config(env={
            "HTTP_MONITOR_ALERT_WINDOW": "60",
            "HTTP_MONITOR_MAX_TIMESTAMP_ERROR": " 0 ",
            "HTTP_MONITOR_STRICT_CHRONOLOGY": "off",
        })
        assert config.alert_window == 60
        assert config.max_timestamp_error == 0
        assert config.strict_chronology is False

    def test_process_environment_is_default(self, monkeypatch):
        monkeypatch.setenv("HTTP_MONITOR_STATS_WINDOW", "15")
        assert load_config().stats_window == 15

    def test_bad_integer_is_rejected(self):
        with pytest.raises(ConfigError, match="HTTP_MONITOR_ALERT_RATE"):
            load_config(env={"HTTP_MONITOR_ALERT_RATE": "lots"})

    def test_bad_boolean_is_rejected(self):
        with pytest.raises(ConfigError, match="HTTP_MONITOR_STRICT_CHRONOLOGY"):
            load_config(env={"HTTP_MONITOR_STRICT_CHRONOLOGY": "maybe"})


class TestPrecedence:
    def test_env_overrides_file_and_overrides_win(self, tmp_path):
        path = _write(tmp_path, "stats_window: 30\nalert_window: 30\nalert_rate: 30\n")
        config = load_config(
            path,
            env={"HTTP_MONITOR_ALERT_WINDOW": "40", "HTTP_MONITOR_ALERT_RATE": "40"},
            overrides={"alert_rate": 50, "stats_window": None},
        )
        assert config.stats_window == 30
        assert config.alert_window == 40
        assert config.alert_rate == 50
