"""Scan-related Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class LicenseResult(BaseModel):
    """License information for a single library.

    Produced once per library by the license finder. Problems that only
    affect this library are recorded in ``errors`` rather than raised.
    """

    model_config = {"extra": "forbid"}

    library: str = Field(description="Library name (common import path prefix)")
    url: str = Field(default="", description="Browsable URL of the license file")
    path: str = Field(default="", description="Local path of the license file")
    license: str = Field(default="", description="Classified license name")
    type: str = Field(default="", description="Classified license type")
    errors: list[str] = Field(
        default_factory=list,
        description="Non-fatal errors encountered while resolving this library",
    )

    @property
    def has_errors(self) -> bool:
        """True if any non-fatal error was recorded."""
        return len(self.errors) > 0

    @property
    def error(self) -> Optional[str]:
        """All recorded errors joined into one message, or None."""
        if not self.errors:
            return None
        return "; ".join(self.errors)
