from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from amqp_registry.config.models import AmqpConfig
from amqp_registry.kernel.errors import ConfigError

DEFAULT_CONFIG_KEY = "amqp"


def load_config(path: Path, *, key: str = DEFAULT_CONFIG_KEY) -> AmqpConfig:
    # YAML loader; the AMQP section lives under `key` in the root mapping.
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {path}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in config file: {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    if key not in raw:
        raise ConfigError(f"Config has no '{key}' section; connection settings are required")
    return config_from_mapping(raw[key], key=key)


def config_from_mapping(raw: Any, *, key: str = DEFAULT_CONFIG_KEY) -> AmqpConfig:
    if raw is None:
        # An empty section means "all defaults".
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{key} must be a mapping")
    try:
        return AmqpConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {key} config: {exc}") from exc
