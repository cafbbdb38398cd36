"""Constants for golicense-analyzer."""

# Exit codes
EXIT_SUCCESS = 0  # No issues found
EXIT_ISSUES = 1  # Policy violations found
EXIT_ERROR = 2  # Scan failed due to error

APPLICATION_NAME = "golicense-analyzer"

# Prefix for environment variable configuration overrides
ENV_PREFIX = "GOLICENSE_ANALYZER_"

# Git remotes tried, in order, when resolving license URLs
DEFAULT_GIT_REMOTES = ["origin", "upstream"]

# Minimum classifier confidence for a license match
DEFAULT_CONFIDENCE_THRESHOLD = 0.9

# Bounded worker pool for per-library classification
MAX_CONCURRENT_CLASSIFICATIONS = 8

# Deadline for external package graph loading (seconds)
GRAPH_LOAD_TIMEOUT = 300.0

# Case-insensitive file name patterns recognised as license files
LICENSE_FILE_PATTERNS = [
    r"^LICEN[CS]E(\.[^.]+)?$",
    r"^LICEN[CS]E[-_][A-Z0-9.-]+(\.[^.]+)?$",
    r"^COPYING(\.[^.]+)?$",
    r"^UNLICENSE(\.[^.]+)?$",
]

# Legal disclaimer
LEGAL_DISCLAIMER = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)
