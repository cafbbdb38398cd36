"""Custom exceptions for golicense-analyzer."""
from __future__ import annotations

from typing import Iterable


class LicenseAnalyzerError(Exception):
    """Base exception for all golicense-analyzer errors."""

    pass


class NetworkError(LicenseAnalyzerError):
    """Exception raised when a network request fails."""

    pass


class ConfigurationError(LicenseAnalyzerError):
    """Exception raised when configuration is invalid."""

    pass


class ScanError(LicenseAnalyzerError):
    """Exception raised when a scan operation fails."""

    pass


class PackageGraphError(ScanError):
    """Exception raised when the package graph cannot be loaded."""

    pass


class ClassifierError(LicenseAnalyzerError):
    """Exception raised when the license classifier cannot be constructed."""

    pass


class ClassificationError(ClassifierError):
    """Exception raised when a single license file cannot be classified."""

    pass


class LicenseLocatorError(LicenseAnalyzerError):
    """Exception raised when a directory cannot be searched for a license."""

    pass


class LicenseURLError(LicenseAnalyzerError):
    """Exception raised when no URL can be derived for a license file."""

    pass


class RuleError(LicenseAnalyzerError):
    """Exception raised when license rules are invalid."""

    pass


class AggregateError(LicenseAnalyzerError):
    """Collection of several errors reported together.

    Every underlying message is preserved, in the order the errors were added.
    """

    def __init__(self, errors: Iterable[BaseException] = ()) -> None:
        self.errors: list[BaseException] = list(errors)
        super().__init__(self._format())

    def append(self, error: BaseException) -> None:
        """Add an error to the collection."""
        if isinstance(error, AggregateError):
            self.errors.extend(error.errors)
        else:
            self.errors.append(error)
        self.args = (self._format(),)

    def _format(self) -> str:
        if not self.errors:
            return "no errors"
        if len(self.errors) == 1:
            return str(self.errors[0])
        details = "\n".join(f"  * {err}" for err in self.errors)
        return f"{len(self.errors)} errors occurred:\n{details}"

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
