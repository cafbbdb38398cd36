"""CLI entry point for golicense-analyzer."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click
from rich.console import Console

from golicense_analyzer import __version__
from golicense_analyzer.analysis.rules import Rules, rules_from_config
from golicense_analyzer.config import AnalyzerConfig, load_config
from golicense_analyzer.constants import (
    APPLICATION_NAME,
    EXIT_ERROR,
    EXIT_ISSUES,
    EXIT_SUCCESS,
)
from golicense_analyzer.exceptions import ConfigurationError, LicenseAnalyzerError
from golicense_analyzer.finder import (
    LicenseFinder,
    default_provider,
    load_classifier,
    scan_licenses,
)
from golicense_analyzer.log import configure_logging
from golicense_analyzer.models.dependency import DependencyTree
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import Verbosity
from golicense_analyzer.output import (
    REPORT_FORMATS,
    TREE_FORMATS,
    TextFormatter,
    get_report_formatter,
    get_tree_formatter,
)
from golicense_analyzer.tree import DependencyTreeBuilder

# Module-level console for consistent output
_console = Console()
# Separate console for errors, rules and progress (writes to stderr)
_error_console = Console(stderr=True)


def _report_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by the list and check commands."""
    options = [
        click.argument("paths", nargs=-1),
        click.option(
            "--format",
            "output_format",
            type=click.Choice(REPORT_FORMATS, case_sensitive=False),
            default=None,
            help="Output format (default: text, or 'format' from config).",
        ),
        click.option(
            "--template-file",
            "template_file",
            type=click.Path(dir_okay=False),
            default=None,
            help="Jinja2 template used with --format template.",
        ),
        click.option(
            "--git-remote",
            "git_remotes",
            multiple=True,
            help="Git remote to try when building license URLs (repeatable).",
        ),
        click.option(
            "--output",
            "-o",
            "output_path",
            type=click.Path(dir_okay=False),
            default=None,
            help="Write report to file instead of stdout.",
        ),
        click.option(
            "--graph",
            "graph_file",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Read the package graph from a YAML/JSON file instead of 'go list'.",
        ),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to configuration file.",
        ),
        click.option(
            "--verbose",
            "-v",
            "verbose_flag",
            is_flag=True,
            default=False,
            help="Show per-library errors and debug logging.",
        ),
        click.option(
            "--quiet",
            "-q",
            "quiet_flag",
            is_flag=True,
            default=False,
            help="Suppress non-essential output.",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    """Map the verbosity flags to a level.

    Raises:
        click.UsageError: If both flags are given.
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


@click.group()
@click.version_option(version=__version__, prog_name=APPLICATION_NAME)
def main() -> None:
    """Go License Analyzer - Attribute licenses to Go dependencies.

    Finds the license covering every package a Go project depends on,
    groups packages into libraries, and checks them against allow or deny
    rules.

    \b
    Examples:
        golicense-analyzer list
        golicense-analyzer list ./... --format csv
        golicense-analyzer check --config .golicense-analyzer.yaml
        golicense-analyzer tree --format json
    """
    pass


@main.command("list")
@_report_options
def list_licenses(
    paths: tuple[str, ...],
    output_format: Optional[str],
    template_file: Optional[str],
    git_remotes: tuple[str, ...],
    output_path: Optional[str],
    graph_file: Optional[str],
    config_path: Optional[str],
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """List the licenses of all dependencies.

    PATHS are Go package patterns (default: the package in the current
    directory).

    \b
    Examples:
        golicense-analyzer list
        golicense-analyzer list ./... --format markdown -o LICENSES.md
        golicense-analyzer list --git-remote upstream --git-remote origin
        golicense-analyzer list --graph deps.yaml --format json
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    configure_logging(verbosity)
    format_value = (output_format or "text").lower()

    try:
        config = load_config(config_path)
        format_value = (output_format or config.format or "text").lower()
        report = _run_report(
            paths, config, git_remotes, graph_file, format_value, verbosity
        )
        _display_report(
            report,
            format_value,
            template_file or config.template_file,
            output_path,
            verbosity,
        )
        sys.exit(EXIT_SUCCESS)

    except LicenseAnalyzerError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@_report_options
def check(
    paths: tuple[str, ...],
    output_format: Optional[str],
    template_file: Optional[str],
    git_remotes: tuple[str, ...],
    output_path: Optional[str],
    graph_file: Optional[str],
    config_path: Optional[str],
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Check dependency licenses against the configured rules.

    Rules come from the configuration file ('allow'/'permit' or
    'deny'/'forbid', plus 'ignore-packages'). Exits with 1 when any
    library violates them.

    \b
    Examples:
        golicense-analyzer check
        golicense-analyzer check ./... --config ci-licenses.yaml
        golicense-analyzer check --format json -o report.json
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    configure_logging(verbosity)
    format_value = (output_format or "text").lower()

    try:
        config = load_config(config_path)
        format_value = (output_format or config.format or "text").lower()
        rules = _load_rules(config)
        if verbosity != Verbosity.QUIET:
            _error_console.print(f"Rules:\n{rules.describe()}", markup=False)

        report = _run_report(
            paths, config, git_remotes, graph_file, format_value, verbosity
        )
        report.evaluation = rules.evaluate(report.sorted_results)
        _display_report(
            report,
            format_value,
            template_file or config.template_file,
            output_path,
            verbosity,
        )

        if not report.evaluation.passed:
            _error_console.print(
                f"[red bold]{len(report.evaluation.violations)} library(ies) "
                "violate the license rules[/red bold]"
            )
            sys.exit(EXIT_ISSUES)
        _error_console.print("[green bold]Passed![/green bold]")
        sys.exit(EXIT_SUCCESS)

    except LicenseAnalyzerError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("path", required=False)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(TREE_FORMATS, case_sensitive=False),
    default="ascii",
    help="Output format for the tree (default: ascii).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write tree to file instead of stdout.",
)
@click.option(
    "--graph",
    "graph_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read the package graph from a YAML/JSON file instead of 'go list'.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug logging.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Suppress warnings.",
)
def tree(
    path: Optional[str],
    output_format: str,
    output_path: Optional[str],
    graph_file: Optional[str],
    config_path: Optional[str],
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Display the dependency tree with licenses.

    PATH is a Go package pattern (default: the package in the current
    directory). Packages that appear more than once are expanded only the
    first time.

    \b
    Examples:
        golicense-analyzer tree
        golicense-analyzer tree ./cmd/server --format json
        golicense-analyzer tree --graph deps.yaml
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    configure_logging(verbosity)
    format_value = output_format.lower()

    try:
        config = load_config(config_path)
        dep_tree = _build_tree(path, config, graph_file)
        content = get_tree_formatter(format_value).format_dependency_tree(dep_tree)
        _emit(content, output_path)
        sys.exit(EXIT_SUCCESS)

    except LicenseAnalyzerError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


def _load_rules(config: AnalyzerConfig) -> Rules:
    """Build the configured rules.

    Raises:
        ConfigurationError: If no rules are configured.
        RuleError: If a pattern is invalid.
    """
    rules = rules_from_config(config)
    if rules is None:
        raise ConfigurationError("no rules configured")
    return rules


def _run_report(
    paths: tuple[str, ...],
    config: AnalyzerConfig,
    git_remotes: tuple[str, ...],
    graph_file: Optional[str],
    format_value: str,
    verbosity: Verbosity,
) -> LicenseReport:
    """Run a license scan.

    Args:
        paths: Root package patterns from the command line.
        config: Loaded configuration.
        git_remotes: Remotes from the command line (override config).
        graph_file: Optional static package graph file.
        format_value: Output format, used to decide on progress display.
        verbosity: Output verbosity level.

    Returns:
        Report holding one result per library.
    """
    finder = LicenseFinder(
        paths=list(paths),
        git_remotes=list(git_remotes) or config.git_remotes,
        confidence_threshold=config.confidence_threshold,
        provider=default_provider(Path(graph_file) if graph_file else None),
        corpus_url=config.corpus_url,
        license_file_patterns=config.license_file_patterns,
    )

    show_progress = format_value == "text" and verbosity != Verbosity.QUIET
    results = asyncio.run(
        scan_licenses(
            finder,
            console=_error_console if show_progress else None,
            show_progress=show_progress,
        )
    )
    return LicenseReport(results=results)


def _build_tree(
    path: Optional[str],
    config: AnalyzerConfig,
    graph_file: Optional[str],
) -> DependencyTree:
    """Build the license-annotated dependency tree for one root."""
    classifier = asyncio.run(
        load_classifier(config.confidence_threshold, corpus_url=config.corpus_url)
    )
    builder = DependencyTreeBuilder(
        provider=default_provider(Path(graph_file) if graph_file else None),
        classifier=classifier,
        license_file_patterns=config.license_file_patterns,
    )
    roots = [path] if path else []
    return builder.build(*roots)


def _display_report(
    report: LicenseReport,
    format_value: str,
    template_file: Optional[str],
    output_path: Optional[str],
    verbosity: Verbosity,
) -> None:
    """Display a report in the specified format.

    Args:
        report: The report to display.
        format_value: Output format.
        template_file: Template for the template format.
        output_path: Optional file path to write output to.
        verbosity: Output verbosity level.
    """
    if format_value == "text":
        if output_path:
            try:
                with open(output_path, "w", encoding="utf-8") as f:
                    file_console = Console(file=f, width=120, force_terminal=False)
                    TextFormatter(console=file_console, verbosity=verbosity).format_report(
                        report
                    )
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot write to output file '{output_path}': {e}"
                ) from e
            _error_console.print(f"[green]Report written to {output_path}[/green]")
        else:
            TextFormatter(console=_console, verbosity=verbosity).format_report(report)
        return

    content = get_report_formatter(format_value, template_file).format_report(report)
    _emit(content, output_path)


def _emit(content: str, output_path: Optional[str]) -> None:
    """Write content to a file, or to stdout."""
    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content, nl=not content.endswith("\n"))


def _write_output_to_file(content: str, output_path: str) -> None:
    """Write content to file.

    Args:
        content: String content to write.
        output_path: Path to output file.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    path = Path(output_path)

    try:
        path.write_text(content, encoding="utf-8")
        _error_console.print(f"[green]Report written to {output_path}[/green]")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot write to output file '{output_path}': {e}"
        ) from e


def _display_error(error: LicenseAnalyzerError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type in ("text", "ascii"):
        _error_console.print(message, style="red bold", markup=False, highlight=False)
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
