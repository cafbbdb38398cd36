"""HTML output formatter for license reports."""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from golicense_analyzer.constants import LEGAL_DISCLAIMER
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.output.report_json import report_metadata

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.html"


class HtmlFormatter:
    """Format license reports as a standalone HTML page.

    Rendered with Jinja2; all values are autoescaped.
    """

    def __init__(self) -> None:
        self._jinja = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def format_report(self, report: LicenseReport) -> str:
        """Format a report as HTML.

        Args:
            report: The report to format.

        Returns:
            HTML document.
        """
        template = self._jinja.get_template(REPORT_TEMPLATE)
        evaluation = report.evaluation
        return template.render(
            metadata=report_metadata(),
            disclaimer=LEGAL_DISCLAIMER,
            results=report.sorted_results,
            unknown_count=report.unknown_count,
            evaluation=evaluation,
            violations=evaluation.violations if evaluation else [],
        )
