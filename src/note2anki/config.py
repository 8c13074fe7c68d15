"""Configuration management for note2anki.

Loads config from a JSON file (YAML for .yaml/.yml) with environment
variable overrides.
Priority: env vars > config file > defaults.

This is the only module that reads the process environment. Everything
else receives an AppConfig explicitly.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from note2anki.errors import ConfigError

DEFAULT_MODEL = "claude-3-5-haiku-20241022"
DEFAULT_CONFIG_PATH = "config.json"

API_KEY_ENV = "ANTHROPIC_API_KEY"

# Mapping of env var names to (config field, type converter)
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    API_KEY_ENV: ("api_key", str),
    "NOTE2ANKI_MODEL": ("model", str),
    "NOTE2ANKI_MAX_TOKENS": ("max_tokens", int),
    "NOTE2ANKI_TEMPERATURE": ("temperature", float),
}

_FILE_KEYS = frozenset({"api_key", "model", "max_tokens", "temperature", "system_prompt"})
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class AppConfig(BaseModel, frozen=True):
    """Application configuration. Immutable."""

    # Claude API
    api_key: str = Field(default="", repr=False)
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=2000, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)

    # Prompt override (None or blank = built-in system prompt)
    system_prompt: str | None = None


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into a dict of known keys.

    .yaml/.yml files are read as YAML; anything else as JSON.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            parsed = yaml.safe_load(raw)
        else:
            parsed = json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigError(
            f"Invalid config file {path}: expected a mapping, "
            f"got {type(parsed).__name__}"
        )

    return {k: v for k, v in parsed.items() if k in _FILE_KEYS}


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to config dict."""
    result = dict(config_dict)
    for env_var, (field_name, converter) in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            try:
                result[field_name] = converter(env_value)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_var}: {env_value!r}") from e
    return result


def load_config(
    config_path: str | None = None,
    *,
    env_file: str | None = ".env",
) -> AppConfig:
    """Load configuration from file with env var overrides.

    Priority: env vars > config file > defaults.

    Args:
        config_path: Path to a JSON/YAML config file. When None, the
            default ``config.json`` is used if it exists.
        env_file: ``.env`` file to load into the environment first
            (existing variables win). None disables it.

    Returns:
        Frozen AppConfig instance.

    Raises:
        ConfigError: If an explicit config_path doesn't exist, the file is
            invalid, a value fails validation, or no API key is available.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    config_dict: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        config_dict = _read_config_file(path)
    else:
        default_path = Path(DEFAULT_CONFIG_PATH)
        if default_path.is_file():
            config_dict = _read_config_file(default_path)

    config_dict = _apply_env_overrides(config_dict)

    try:
        config = AppConfig(**config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if not config.api_key.strip():
        raise ConfigError(
            f"API key not found. Set the {API_KEY_ENV} environment variable "
            "or provide api_key in the config file"
        )

    return config
