"""Configuration as a frozen dataclass built from defaults, an optional YAML file, then env vars."""

import logging
import os
from dataclasses import dataclass, fields, replace

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# YAML sections whose keys map straight onto Config fields.
_YAML_SECTIONS = ("server", "paths", "logs")

_ENV_VARS = {
    "host": "SERVER_HOST",
    "port": "PORT",
    "debug": "DEBUG",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "bytes_file": "BYTES_FILE",
    "ignore_file": "IGNORE_FILE",
    "web_dir": "WEB_DIR",
    "lookback_days": "LOOKBACK_DAYS",
    "timezone": "TZ_NAME",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    host: str = "0.0.0.0"
    port: int = 9080
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = "/var/log/traffic-domains/traffic-domains.log"
    bytes_file: str = "/var/log/traffic-domains/traffic-bytes.json"
    ignore_file: str = "/etc/traffic-monitor/ignore-domains.txt"
    web_dir: str = "/opt/traffic-monitor/web"
    lookback_days: int = 30
    timezone: str | None = None


_FIELD_TYPES = {f.name: f.type for f in fields(Config)}
_DEFAULTS = {f.name: f.default for f in fields(Config)}


def _coerce(name: str, value):
    # A key left blank in YAML keeps its default.
    if value is None:
        return _DEFAULTS[name]
    kind = _FIELD_TYPES[name]
    if kind is bool:
        return _parse_bool(value)
    if kind is int:
        return int(value)
    if name == "log_level":
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            logger.warning("Unknown log level %r, using %s", value, _DEFAULTS[name])
            return _DEFAULTS[name]
        return level
    if name == "timezone":
        return str(value) if value else None
    return str(value)


def _load_yaml(config_path: str) -> dict:
    """Flatten a YAML config file into Config field overrides."""
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError:
        logger.warning("Invalid YAML in %s, using defaults", config_path)
        return {}

    if not isinstance(data, dict):
        return {}

    overrides = {}
    for key, value in data.items():
        if key in _YAML_SECTIONS and isinstance(value, dict):
            for sub_key, sub_value in value.items():
                if sub_key in _FIELD_TYPES:
                    overrides[sub_key] = sub_value
        elif key in _FIELD_TYPES:
            overrides[key] = value
    return overrides


def load_config(config_path: str | None = None) -> Config:
    """Build Config from defaults, then the YAML file, then environment variables."""
    config = Config()

    config_path = config_path or os.environ.get("CONFIG_PATH")
    if config_path:
        overrides = _load_yaml(config_path)
        config = replace(config, **{k: _coerce(k, v) for k, v in overrides.items()})

    env_overrides = {
        name: _coerce(name, os.environ[var])
        for name, var in _ENV_VARS.items()
        if var in os.environ
    }
    return replace(config, **env_overrides)
