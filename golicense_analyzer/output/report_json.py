"""JSON output formatter for license reports."""
import json
from datetime import datetime, timezone
from typing import Any

from golicense_analyzer import __version__
from golicense_analyzer.constants import LEGAL_DISCLAIMER
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult


def report_metadata() -> dict[str, Any]:
    """Build the metadata block shared by machine-readable reports."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "generated_at": timestamp,
        "tool_version": __version__,
        "disclaimer": LEGAL_DISCLAIMER,
    }


def result_to_dict(result: LicenseResult) -> dict[str, Any]:
    """Convert a license result to a JSON-friendly dictionary."""
    return {
        "library": result.library,
        "url": result.url,
        "path": result.path,
        "license": result.license,
        "type": result.type,
        "errors": list(result.errors),
    }


class JsonFormatter:
    """Format license reports as JSON output.

    Provides structured output for programmatic processing and CI/CD
    integration.
    """

    def format_report(self, report: LicenseReport) -> str:
        """Format a report as a JSON string.

        Args:
            report: The report to format.

        Returns:
            JSON string representation of the report.
        """
        return json.dumps(self._build_output(report), indent=2)

    def _build_output(self, report: LicenseReport) -> dict[str, Any]:
        evaluation = report.evaluation
        return {
            "metadata": report_metadata(),
            "summary": {
                "total_libraries": len(report.results),
                "unknown_licenses": report.unknown_count,
                "libraries_with_errors": sum(1 for r in report.results if r.has_errors),
                "evaluated": evaluation is not None,
                "passed": evaluation.passed if evaluation is not None else None,
            },
            "results": [result_to_dict(r) for r in report.sorted_results],
            "violations": [
                result_to_dict(r) for r in (evaluation.violations if evaluation else [])
            ],
            "ignored": list(evaluation.ignored) if evaluation else [],
        }
