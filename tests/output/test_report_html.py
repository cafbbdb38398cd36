"""Tests for the HTML report formatter."""
from golicense_analyzer.models.policy import Evaluation
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult
from golicense_analyzer.output.report_html import HtmlFormatter


class TestHtmlFormatter:
    """Tests for HtmlFormatter.format_report."""

    def test_renders_libraries(self) -> None:
        """Test that the page lists every library."""
        report = LicenseReport(
            results=[LicenseResult(library="github.com/a/mit", license="MIT", type="notice")]
        )
        output = HtmlFormatter().format_report(report)

        assert output.lstrip().startswith("<!DOCTYPE html>")
        assert "github.com/a/mit" in output
        assert "NOT LEGAL ADVICE" in output

    def test_values_are_escaped(self) -> None:
        """Test that library data cannot inject markup."""
        report = LicenseReport(results=[LicenseResult(library="x.com/<script>", license="MIT")])
        output = HtmlFormatter().format_report(report)

        assert "<script>" not in output
        assert "x.com/&lt;script&gt;" in output

    def test_failed_status(self) -> None:
        """Test that violations are shown with a failed status."""
        gpl = LicenseResult(library="github.com/b/gpl", license="GPL-3.0")
        report = LicenseReport(
            results=[gpl], evaluation=Evaluation(passed=False, violations=[gpl])
        )
        output = HtmlFormatter().format_report(report)

        assert "Rule Violations" in output
        assert "FAILED" in output
