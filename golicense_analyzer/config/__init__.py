"""Configuration handling for golicense-analyzer."""
from __future__ import annotations

from golicense_analyzer.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from golicense_analyzer.config.loader import (
    candidate_config_paths,
    find_config_file,
    load_config,
    load_config_file,
)
from golicense_analyzer.models.config import AnalyzerConfig

__all__ = [
    "AnalyzerConfig",
    "DEFAULT_CONFIG_NAMES",
    "candidate_config_paths",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
