"""CSV output formatter for license reports."""
import csv
import io

from golicense_analyzer.models.report import LicenseReport

CSV_HEADER = ["library", "url", "path", "license", "type", "errors"]


class CsvFormatter:
    """Format license reports as CSV, one row per library."""

    def format_report(self, report: LicenseReport) -> str:
        """Format a report as CSV.

        Args:
            report: The report to format.

        Returns:
            CSV text with a header row.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for result in report.sorted_results:
            writer.writerow(
                [
                    result.library,
                    result.url,
                    result.path,
                    result.license,
                    result.type,
                    result.error or "",
                ]
            )
        return buffer.getvalue()
