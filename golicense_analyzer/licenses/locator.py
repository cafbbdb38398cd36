"""License file discovery.

Finds the license file covering a package by walking from the package's
source directory up through its ancestors.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Sequence

from golicense_analyzer.constants import LICENSE_FILE_PATTERNS
from golicense_analyzer.exceptions import LicenseLocatorError

logger = logging.getLogger(__name__)


class LicensePathCache:
    """Directory to license path memo for a single scan.

    Create one per scan and discard it afterwards; entries are not
    invalidated when files change on disk.
    """

    def __init__(self) -> None:
        self._entries: dict[Path, str] = {}

    def get(self, directory: Path) -> Optional[str]:
        """Return the cached license path for a directory, if known."""
        return self._entries.get(directory)

    def put(self, directory: Path, license_path: str) -> None:
        """Remember the license path covering a directory."""
        self._entries[directory] = license_path

    def __contains__(self, directory: object) -> bool:
        return directory in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class LicenseLocator:
    """Finds the nearest license file in a directory's ancestry."""

    def __init__(
        self,
        patterns: Optional[Sequence[str]] = None,
        cache: Optional[LicensePathCache] = None,
    ) -> None:
        """Initialize the locator.

        Args:
            patterns: Regular expressions for license file names, matched
                case-insensitively. Defaults to LICENSE_FILE_PATTERNS.
            cache: Per-scan cache. A new one is created if not provided.
        """
        pattern_list = list(patterns) if patterns else list(LICENSE_FILE_PATTERNS)
        try:
            self._patterns = [re.compile(p, re.IGNORECASE) for p in pattern_list]
        except re.error as e:
            raise LicenseLocatorError(f"Invalid license file pattern: {e}") from e
        self._cache = cache if cache is not None else LicensePathCache()

    @property
    def cache(self) -> LicensePathCache:
        """The cache used by this locator."""
        return self._cache

    def is_license_file(self, name: str) -> bool:
        """Check whether a file name looks like a license file."""
        return any(p.match(name) for p in self._patterns)

    def find(self, directory: Path | str) -> str:
        """Find the license file covering a directory.

        Searches the directory itself, then each parent up to the filesystem
        root, and returns the first license file found.

        Args:
            directory: Directory to start from.

        Returns:
            Path of the license file, or an empty string if no ancestor
            contains one.

        Raises:
            LicenseLocatorError: If a directory cannot be listed.
        """
        start = Path(directory).resolve()
        visited: list[Path] = []
        found = ""

        for current in (start, *start.parents):
            cached = self._cache.get(current)
            if cached is not None:
                found = cached
                break
            visited.append(current)
            match = self._license_in(current)
            if match is not None:
                found = str(match)
                break

        for path in visited:
            self._cache.put(path, found)
        return found

    def _license_in(self, directory: Path) -> Optional[Path]:
        """Return the license file directly inside a directory, if any."""
        try:
            names = sorted(
                entry.name for entry in directory.iterdir() if entry.is_file()
            )
        except FileNotFoundError:
            return None
        except OSError as e:
            raise LicenseLocatorError(
                f"Cannot search '{directory}' for a license file: {e}"
            ) from e

        for name in names:
            if self.is_license_file(name):
                return directory / name
        return None
