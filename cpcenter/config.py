"""Service configuration read from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import yaml


class ConfigError(ValueError):
    """The configuration is malformed or incomplete."""


@dataclass(frozen=True)
class Config:
    """Settings the service needs to reach its database."""

    mysql_dsn: str


def parse_config(text: str) -> Config:
    """Read a configuration from YAML text holding ``mysql: {dsn: ...}``."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping")
    mysql = data.get("mysql") or {}
    if not isinstance(mysql, dict):
        raise ConfigError("mysql section must be a mapping")
    dsn = mysql.get("dsn")
    if isinstance(dsn, (dict, list)):
        raise ConfigError("mysql dsn must be a scalar")
    dsn = "" if dsn is None else str(dsn)
    if not dsn:
        raise ConfigError("MySQL DSN is empty")
    return Config(mysql_dsn=dsn)


def load_config(path: str | PathLike[str]) -> Config:
    """Read a configuration file; OSError propagates if it cannot be read."""
    return parse_config(Path(path).read_text(encoding="utf-8"))