"""Shell settings: defaults, YAML config file, .env values and environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from treeshell.infrastructure.logger import logger

DEFAULT_CONFIG_PATH: Path = Path.home() / ".config" / "treeshell" / "config.yaml"

# Environment variable -> settings field.
ENV_KEYS: dict[str, str] = {
    "TREESHELL_TREE_DEPTH": "tree_depth",
    "TREESHELL_TREE_INDENT": "tree_indent",
    "TREESHELL_TREE_MARKER": "tree_marker",
    "TREESHELL_RESTRICT_REMOVE": "restrict_remove_to_cwd",
    "TREESHELL_PROMPT_TIME_FORMAT": "prompt_time_format",
}


class ConfigError(Exception):
    """Raised when the configuration file or values are invalid."""


class ShellSettings(BaseModel):
    tree_depth: int = Field(default=2, ge=0)
    tree_indent: str = "\t"
    tree_marker: str = "└"
    restrict_remove_to_cwd: bool = False
    prompt_time_format: str = "%Y-%m-%d %H:%M:%S"


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Values are returned, not exported to os.environ, so commands started
    with `!` never inherit them.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def read_config_file(path: Path) -> dict[str, Any]:
    """Load the YAML config file. A missing file is an empty config."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as err:
        raise ConfigError(f"Cannot read config file {path}: {err}") from err

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigError(f"Invalid YAML in {path}: {err}") from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(config_path: Path | None = None) -> ShellSettings:
    """Build settings from defaults < config file < .env < environment."""
    if config_path is None:
        env_path = os.environ.get("TREESHELL_CONFIG")
        config_path = Path(env_path).expanduser() if env_path else DEFAULT_CONFIG_PATH

    values: dict[str, Any] = dict(read_config_file(config_path))

    env_config = read_env_file(list(ENV_KEYS))
    for env_key, field in ENV_KEYS.items():
        value = os.environ.get(env_key) or env_config.get(env_key)
        if value is not None:
            values[field] = value

    try:
        settings = ShellSettings(**values)
    except ValidationError as err:
        raise ConfigError(f"Invalid settings: {err}") from err

    logger.debug("Settings loaded", config_path=str(config_path), **settings.model_dump())
    return settings
