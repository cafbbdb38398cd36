"""Tests for the Markdown report formatter."""
from golicense_analyzer.models.policy import Evaluation
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult
from golicense_analyzer.output.report_markdown import MarkdownFormatter

MIT = LicenseResult(
    library="github.com/a/mit",
    url="https://github.com/a/mit/blob/master/LICENSE",
    path="/m/LICENSE",
    license="MIT",
    type="notice",
)


class TestMarkdownFormatter:
    """Tests for MarkdownFormatter.format_report."""

    def test_sections(self) -> None:
        """Test that the document has a title, summary and library table."""
        output = MarkdownFormatter().format_report(LicenseReport(results=[MIT]))

        assert output.startswith("# License Report\n")
        assert "## Summary" in output
        assert "NOT LEGAL ADVICE" in output
        assert "## Libraries" in output
        assert "| `github.com/a/mit` | MIT | notice | [/m/LICENSE](https://github.com/a/mit/blob/master/LICENSE) |" in output

    def test_unknown_license(self) -> None:
        """Test that a missing license is flagged."""
        output = MarkdownFormatter().format_report(
            LicenseReport(results=[LicenseResult(library="x.com/y")])
        )
        assert "Unknown" in output

    def test_escapes_pipes(self) -> None:
        """Test that table cells cannot break the table."""
        output = MarkdownFormatter().format_report(
            LicenseReport(results=[LicenseResult(library="x.com/y", license="MIT | GPL")])
        )
        assert "MIT \\| GPL" in output

    def test_violations(self) -> None:
        """Test that violations get their own section and a failed status."""
        gpl = LicenseResult(library="github.com/b/gpl", license="GPL-3.0")
        report = LicenseReport(
            results=[MIT, gpl], evaluation=Evaluation(passed=False, violations=[gpl])
        )
        output = MarkdownFormatter().format_report(report)

        assert "## Rule Violations" in output
        assert "FAILED" in output
        assert output.index("## Rule Violations") < output.index("## Libraries")

    def test_empty_report(self) -> None:
        """Test that an empty report says so."""
        assert "*No libraries found.*" in MarkdownFormatter().format_report(LicenseReport())
