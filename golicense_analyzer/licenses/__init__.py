"""License discovery, classification and URL resolution."""

from golicense_analyzer.licenses.classifier import (
    Classifier,
    LicenseType,
    default_corpus_archive,
    fetch_corpus_archive,
    load_corpus,
)
from golicense_analyzer.licenses.library import aggregate_libraries, unvendor
from golicense_analyzer.licenses.locator import LicenseLocator, LicensePathCache
from golicense_analyzer.licenses.urls import (
    REPO_PATH_PREFIXES,
    find_git_repo,
    find_license_url,
    library_file_url,
    parse_remote_url,
)

__all__ = [
    "Classifier",
    "LicenseLocator",
    "LicensePathCache",
    "LicenseType",
    "REPO_PATH_PREFIXES",
    "aggregate_libraries",
    "default_corpus_archive",
    "fetch_corpus_archive",
    "find_git_repo",
    "find_license_url",
    "library_file_url",
    "load_corpus",
    "parse_remote_url",
    "unvendor",
]
