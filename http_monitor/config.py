"""Load a Config from YAML, environment variables and CLI overrides.

Precedence, lowest first: Config defaults, YAML file, HTTP_MONITOR_*
environment variables, explicit overrides.  The YAML file is a flat
mapping of Config field names:

    stats_window: 10
    alert_window: 120
    alert_rate: 10
    max_timestamp_error: 1
    strict_chronology: true
"""

import os
from dataclasses import fields
from pathlib import Path

import yaml

from http_monitor.errors import ConfigError
from http_monitor.models import Config

ENV_PREFIX = "HTTP_MONITOR_"

_FIELDS = {f.name: f.type for f in fields(Config)}
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def load_config(path: str | Path | None = None, env: dict | None = None,
                overrides: dict | None = None) -> Config:
    values = {}
    if path is not None:
        values.update(_parse_and_validate(Path(path)))
    values.update(_from_env(os.environ if env is None else env))
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return Config(**values)


def _parse_and_validate(path: Path) -> dict:
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        try:
            definition = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path.name}: invalid YAML: {e}") from e

    if definition is None:
        return {}
    if not isinstance(definition, dict):
        raise ConfigError(f"{path.name}: top level must be a mapping")

    for key in definition:
        if key not in _FIELDS:
            raise ConfigError(f"{path.name}: unknown field '{key}'")
    return definition


def _from_env(env) -> dict:
    values = {}
    for name, kind in _FIELDS.items():
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        values[name] = _parse_env_value(name, kind, raw.strip())
    return values


def _parse_env_value(name: str, kind, raw: str):
    var = ENV_PREFIX + name.upper()
    if kind is bool:
        if raw.lower() in _TRUE:
            return True
        if raw.lower() in _FALSE:
            return False
        raise ConfigError(f"{var} must be a boolean, got {raw!r}")
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{var} must be an integer, got {raw!r}") from None
