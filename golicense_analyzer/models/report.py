"""Report model consumed by the output renderers."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from golicense_analyzer.models.policy import Evaluation
from golicense_analyzer.models.scan import LicenseResult


class LicenseReport(BaseModel):
    """Input for report renderers: results plus an optional rule evaluation."""

    model_config = {"extra": "forbid"}

    results: list[LicenseResult] = Field(
        default_factory=list,
        description="One result per library",
    )
    evaluation: Optional[Evaluation] = Field(
        default=None,
        description="Outcome of the license rules, when rules were checked",
    )

    @property
    def sorted_results(self) -> list[LicenseResult]:
        """Results ordered by library name."""
        return sorted(self.results, key=lambda r: (r.library, r.path))

    @property
    def unknown_count(self) -> int:
        """Number of libraries without a classified license."""
        return sum(1 for r in self.results if not r.license)

    @property
    def has_violations(self) -> bool:
        """True if rules were evaluated and failed."""
        return self.evaluation is not None and not self.evaluation.passed
