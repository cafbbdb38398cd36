"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult, Verbosity


class TextFormatter:
    """Format license reports for terminal display using Rich.

    Libraries are listed in a table; when rules were evaluated, the
    offending libraries follow in a separate section.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_report(self, report: LicenseReport) -> None:
        """Format and display a report.

        Args:
            report: The report to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(report)
            return

        if not report.results:
            self._console.print("[yellow]No libraries found[/yellow]")
            return

        show_errors = self._verbosity == Verbosity.VERBOSE
        table = Table(title="License Report")
        table.add_column("Library", style="cyan", no_wrap=True)
        table.add_column("License", style="green")
        table.add_column("Type", style="magenta")
        table.add_column("URL", overflow="fold")
        if show_errors:
            table.add_column("Errors", style="red", overflow="fold")

        for result in report.sorted_results:
            license_display = (
                escape(result.license) if result.license else "[yellow]Unknown[/yellow]"
            )
            row = [
                escape(result.library),
                license_display,
                result.type,
                escape(result.url),
            ]
            if show_errors:
                row.append(escape(result.error or ""))
            table.add_row(*row)

        self._console.print(table)

        if report.evaluation is not None and report.evaluation.violations:
            self._print_violations(report.evaluation.violations)

        self._console.print(f"\n[bold]Total libraries:[/bold] {len(report.results)}")
        self._console.print(f"[bold]Unknown licenses:[/bold] {report.unknown_count}")
        if report.evaluation is not None:
            self._console.print(
                f"[bold]Rule violations:[/bold] {len(report.evaluation.violations)}"
            )

    def _print_quiet_output(self, report: LicenseReport) -> None:
        """Print only the status line and offending libraries."""
        if report.evaluation is None:
            self._console.print(f"{len(report.results)} libraries scanned")
            return

        if report.has_violations:
            violations = report.evaluation.violations
            self._console.print(
                f"[red]FAILED[/red] - {len(violations)} library(ies) violate the rules"
            )
            for result in violations:
                license_name = escape(result.license) if result.license else "Unknown"
                self._console.print(f"  - {escape(result.library)}: [red]{license_name}[/red]")
        else:
            self._console.print(
                f"[green]PASS[/green] - All {len(report.results)} libraries allowed"
            )

    def _print_violations(self, violations: list[LicenseResult]) -> None:
        """Print the libraries that violate the rules."""
        table = Table(title="Rule Violations", title_style="bold red")
        table.add_column("Library", style="cyan", no_wrap=True)
        table.add_column("License", style="red")
        table.add_column("Path", overflow="fold")
        for result in violations:
            table.add_row(
                escape(result.library),
                escape(result.license) if result.license else "Unknown",
                escape(result.path),
            )
        self._console.print()
        self._console.print(table)
