"""Configuration management for the CLI."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from specsearch.exceptions import ConfigError
from specsearch.search.models import (
    DEFAULT_CONTEXT_LENGTH,
    DEFAULT_MAX_MATCHES_PER_SPEC,
)

logger = logging.getLogger(__name__)

SEARCH_MODES = ("advanced", "simple")


@dataclass
class SearchSettings:
    """Effective search settings after merging config sources."""

    max_matches_per_spec: int = DEFAULT_MAX_MATCHES_PER_SPEC
    context_length: int = DEFAULT_CONTEXT_LENGTH
    mode: str = "advanced"
    documents: Path | None = None


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "specsearch" / "config.yaml")

        # Project config
        paths.append(Path(".specsearch.yaml"))
        paths.append(Path("specsearch.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(explicit: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Default locations are merged in order (last one wins). An explicit
    config file is applied after them and must be valid; broken default
    files are skipped with a warning.
    """
    config: dict[str, Any] = {}

    for path in Config.get_config_paths():
        if path.exists():
            try:
                config = Config.merge_configs(config, Config.from_file(path))
            except ConfigError as e:
                logger.warning("Skipping config: %s", e)

    if explicit is not None:
        config = Config.merge_configs(config, Config.from_file(explicit))

    env_overrides: dict[str, Any] = {}
    search_overrides: dict[str, Any] = {}
    if documents := os.environ.get("SPECSEARCH_DOCUMENTS"):
        env_overrides["documents"] = documents
    if max_matches := os.environ.get("SPECSEARCH_MAX_MATCHES"):
        search_overrides["max_matches_per_spec"] = max_matches
    if context_length := os.environ.get("SPECSEARCH_CONTEXT_LENGTH"):
        search_overrides["context_length"] = context_length
    if search_overrides:
        env_overrides["search"] = search_overrides

    return Config.merge_configs(config, env_overrides)


def _positive_int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from e
    if number < 1:
        raise ConfigError(f"{key} must be at least 1, got {number}")
    return number


def search_settings(config: dict[str, Any]) -> SearchSettings:
    """Extract validated search settings from a configuration mapping."""
    section = config.get("search") or {}
    if not isinstance(section, dict):
        raise ConfigError("'search' section must be a mapping")

    settings = SearchSettings()

    if "max_matches_per_spec" in section:
        settings.max_matches_per_spec = _positive_int(
            section["max_matches_per_spec"], "search.max_matches_per_spec"
        )
    if "context_length" in section:
        settings.context_length = _positive_int(
            section["context_length"], "search.context_length"
        )
    if "mode" in section:
        mode = str(section["mode"]).lower()
        if mode not in SEARCH_MODES:
            raise ConfigError(
                f"search.mode must be one of {', '.join(SEARCH_MODES)}, got {mode!r}"
            )
        settings.mode = mode

    if documents := config.get("documents"):
        settings.documents = Path(documents)

    return settings


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
