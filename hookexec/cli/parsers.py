"""CLI argument parsers and loaders."""

from __future__ import annotations

import os
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import HookConfig


def parse_assignment(value: str) -> tuple[str, str]:
    """Parse a template value argument in format KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, item = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Empty key in: {value!r}")
    return key, item


def collect_env_values(prefix: str) -> dict[str, str]:
    """Collect environment variables starting with *prefix* as template values.

    Args:
        prefix: Variable prefix (e.g., "HOOK_")

    Returns:
        Mapping of lower-cased names, prefix stripped, to raw values
    """
    return {
        key[len(prefix) :].lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix) and len(key) > len(prefix)
    }


def load_hook_config(path: Path) -> HookConfig:
    """Load a hook configuration from a YAML or JSON file.

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    if not path.exists():
        raise ConfigError(f"Hook config not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Hook config must be a mapping: {path}")

    try:
        return HookConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid hook config {path}: {e}") from e
