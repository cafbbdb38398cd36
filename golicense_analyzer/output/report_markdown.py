"""Markdown output formatter for license reports."""
from datetime import datetime, timezone

from golicense_analyzer.constants import LEGAL_DISCLAIMER
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult


def _cell(value: str) -> str:
    """Escape a value for use inside a Markdown table cell."""
    return value.replace("|", "\\|").replace("\n", " ")


class MarkdownFormatter:
    """Format license reports as Markdown, suitable for legal review."""

    def format_report(self, report: LicenseReport) -> str:
        """Format a report as a Markdown string.

        Args:
            report: The report to format.

        Returns:
            Markdown document.
        """
        lines: list[str] = ["# License Report", ""]

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")

        lines.extend(self._format_summary(report))
        lines.append("")
        lines.extend(["> **NOT LEGAL ADVICE**", ">", f"> {LEGAL_DISCLAIMER}", ""])

        if not report.results:
            lines.append("*No libraries found.*")
            return "\n".join(lines) + "\n"

        if report.evaluation is not None and report.evaluation.violations:
            lines.extend(self._format_violations(report.evaluation.violations))
            lines.append("")

        lines.extend(self._format_libraries(report))
        return "\n".join(lines) + "\n"

    def _format_summary(self, report: LicenseReport) -> list[str]:
        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Libraries | {len(report.results)} |",
            f"| Unknown Licenses | {report.unknown_count} |",
        ]
        if report.evaluation is not None:
            status = "✅ PASS" if report.evaluation.passed else "❌ FAILED"
            lines.append(f"| Rule Violations | {len(report.evaluation.violations)} |")
            lines.append(f"| **Status** | **{status}** |")
        return lines

    def _format_libraries(self, report: LicenseReport) -> list[str]:
        lines = [
            "## Libraries",
            "",
            "| Library | License | Type | URL |",
            "|---------|---------|------|-----|",
        ]
        for result in report.sorted_results:
            license_display = _cell(result.license) if result.license else "⚠️ Unknown"
            url = f"[{_cell(result.path)}]({result.url})" if result.url else ""
            lines.append(
                f"| `{_cell(result.library)}` | {license_display} | "
                f"{_cell(result.type)} | {url} |"
            )
        return lines

    def _format_violations(self, violations: list[LicenseResult]) -> list[str]:
        lines = [
            "## Rule Violations",
            "",
            f"> **{len(violations)} library(ies) violate the license rules**",
            "",
            "| Library | License |",
            "|---------|---------|",
        ]
        for result in violations:
            license_display = _cell(result.license) if result.license else "Unknown"
            lines.append(f"| `{_cell(result.library)}` | {license_display} |")
        return lines
