"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from appmeta.common.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config/default.yaml")


def _resolve_env_vars(value: str) -> str:
    """Resolve ${VAR:default} patterns in strings."""
    pattern = r"\$\{(\w+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _resolve_config(obj: Any) -> Any:
    """Recursively resolve environment variables in config."""
    if isinstance(obj, str):
        return _resolve_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _resolve_config(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_resolve_config(v) for v in obj]
    return obj


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class MetadataConfig(BaseModel):
    distribution: str = ""  # empty: resolve from the module instead
    version_default: str = "0.0.0.0"
    culture_default: str = ""  # empty: use the current locale
    # Constant values registered over the standard attribute factories
    overrides: dict[str, str] = Field(default_factory=dict)


class AppMetaConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)


def save_config(config: AppMetaConfig, config_path: str | Path | None = None) -> None:
    """Save config to a YAML file."""
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def load_config(config_path: str | Path | None = None) -> AppMetaConfig:
    """Load config from YAML file with environment variable resolution."""
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

    if not config_path.exists():
        return AppMetaConfig()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if raw is None:
        return AppMetaConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root in {config_path} must be a mapping")

    try:
        return AppMetaConfig.model_validate(_resolve_config(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
