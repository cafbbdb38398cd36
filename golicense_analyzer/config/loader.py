"""Configuration file discovery and loading for golicense-analyzer."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from golicense_analyzer.config.defaults import (
    CONFIG_DIR_FILE,
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_NAMES,
    get_default_config,
)
from golicense_analyzer.constants import APPLICATION_NAME, ENV_PREFIX
from golicense_analyzer.exceptions import ConfigurationError
from golicense_analyzer.models.config import AnalyzerConfig

# Options that can be set from the environment, and whether they are lists
ENV_OPTIONS: dict[str, bool] = {
    "allow": True,
    "deny": True,
    "ignore_packages": True,
    "git_remotes": True,
    "license_file_patterns": True,
    "confidence_threshold": False,
    "corpus_url": False,
    "format": False,
    "template_file": False,
}


def candidate_config_paths(
    start_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """List configuration file locations in search order.

    Args:
        start_dir: Project directory. Defaults to current working directory.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Candidate paths, most specific first.
    """
    env = os.environ if environ is None else environ
    search_dir = start_dir or Path.cwd()

    candidates = [search_dir / name for name in DEFAULT_CONFIG_NAMES]
    candidates.append(search_dir / CONFIG_DIR_NAME / CONFIG_DIR_FILE)
    candidates.append(Path.home() / DEFAULT_CONFIG_NAMES[0])

    xdg_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    candidates.append(Path(xdg_home) / APPLICATION_NAME / CONFIG_DIR_FILE)
    return candidates


def find_config_file(
    start_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Find the first existing configuration file.

    Args:
        start_dir: Directory to search. Defaults to current working directory.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    for config_path in candidate_config_paths(start_dir, environ):
        if config_path.is_file():
            return config_path
    return None


def _read_config_data(path: Path) -> dict[str, Any]:
    """Read the raw mapping stored in a YAML configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, PermissionError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in '{path}': {e}"
        ) from e

    # Empty or comment-only document
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect configuration values from ``GOLICENSE_ANALYZER_*`` variables.

    List options are comma separated.
    """
    overrides: dict[str, Any] = {}
    for option, is_list in ENV_OPTIONS.items():
        raw = environ.get(f"{ENV_PREFIX}{option.upper()}")
        if raw is None or not raw.strip():
            continue
        if is_list:
            overrides[option] = [item.strip() for item in raw.split(",") if item.strip()]
        else:
            overrides[option] = raw.strip()
    return overrides


def _merge(data: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Apply environment overrides on top of file data.

    A file key written with an alias (``permit``, ``ignore-packages``) is
    replaced by the override for the same option.
    """
    if not overrides:
        return data
    merged = dict(data)
    alias_groups = {
        "allow": ("permit",),
        "deny": ("forbid",),
    }
    for option, value in overrides.items():
        for alias in alias_groups.get(option, ()) + (option.replace("_", "-"),):
            merged.pop(alias, None)
        merged[option] = value
    return merged


def _format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        msg = err["msg"]
        messages.append(f"{loc}: {msg}")
    return "; ".join(messages)


def _validate(data: dict[str, Any], source: str) -> AnalyzerConfig:
    try:
        return AnalyzerConfig.model_validate(data)
    except ValidationError as e:
        error_messages = _format_validation_errors(e)
        raise ConfigurationError(
            f"Invalid configuration in {source}: {error_messages}"
        ) from e


def load_config_file(
    path: Path,
    environ: Mapping[str, str] | None = None,
) -> AnalyzerConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.
        environ: Environment mapping for overrides. Defaults to an empty
            mapping, so only the file contents are used.

    Returns:
        Validated AnalyzerConfig instance.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or fails Pydantic validation.
    """
    data = _merge(_read_config_data(path), _env_overrides(environ or {}))
    return _validate(data, f"'{path}'")


def load_config(
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> AnalyzerConfig:
    """Load configuration from file, environment, or defaults.

    If a config_path is provided, loads from that file. Otherwise, searches
    the standard locations. Environment variables override file values.

    Args:
        config_path: Optional path to configuration file.
            If provided, must exist and be valid.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        AnalyzerConfig with loaded or default values.

    Raises:
        ConfigurationError: If the configuration file or the environment
            values are invalid.
    """
    env = os.environ if environ is None else environ

    if config_path is not None:
        return load_config_file(Path(config_path), env)

    discovered = find_config_file(environ=env)
    if discovered is not None:
        return load_config_file(discovered, env)

    overrides = _env_overrides(env)
    if not overrides:
        return get_default_config()
    return _validate(overrides, "environment")
