"""Default configuration values for golicense-analyzer."""

from __future__ import annotations

from golicense_analyzer.models.config import AnalyzerConfig

# Configuration file names searched for in the working directory
DEFAULT_CONFIG_NAMES = [".golicense-analyzer.yaml", ".golicense-analyzer.yml"]

# Configuration file inside a per-project or per-user directory
CONFIG_DIR_NAME = ".golicense-analyzer"
CONFIG_DIR_FILE = "config.yaml"


def get_default_config() -> AnalyzerConfig:
    """Get the default configuration.

    Returns:
        AnalyzerConfig with all defaults.
    """
    return AnalyzerConfig()
