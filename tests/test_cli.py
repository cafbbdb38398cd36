"""CLI behavior tests for golicense-analyzer."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from golicense_analyzer import __version__
from golicense_analyzer.cli import main
from golicense_analyzer.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS

if TYPE_CHECKING:
    from conftest import Workspace


@pytest.fixture
def project(workspace: Workspace, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Run commands from the workspace with no user configuration."""
    home = workspace.root / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.chdir(workspace.root)
    return workspace


def _config(workspace: Workspace, content: str) -> str:
    path = workspace.root / "rules.yaml"
    path.write_text(content)
    return str(path)


def test_cli_help(cli_runner: CliRunner) -> None:
    """Test that --help outputs usage information."""
    result = cli_runner.invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "Go License Analyzer" in result.output
    for command in ("list", "check", "tree"):
        assert command in result.output
    assert "--version" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    """Test that --version outputs correct version."""
    result = cli_runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


class TestListCommand:
    """Tests for the list command."""

    def test_help(self, cli_runner: CliRunner) -> None:
        """Test that list --help shows the shared options."""
        result = cli_runner.invoke(main, ["list", "--help"])

        assert result.exit_code == 0
        for option in ("--format", "--git-remote", "--graph", "--template-file"):
            assert option in result.output

    def test_json_output(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that every library is listed in JSON output."""
        result = cli_runner.invoke(
            main, ["list", "--graph", str(project.graph_file), "--format", "json"]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = json.loads(result.stdout)
        licenses = {r["library"]: r["license"] for r in data["results"]}
        assert licenses == {
            "example.com/app": "MIT",
            "example.com/nolicense/pkg": "",
            "github.com/org/repo": "MIT",
            "github.com/other/lib": "BSD-3-Clause",
        }
        assert data["summary"]["evaluated"] is False

    def test_text_output(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that the default output is a terminal table."""
        result = cli_runner.invoke(main, ["list", "--graph", str(project.graph_file)])

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "License Report" in result.output
        assert "Total libraries: 4" in result.output

    def test_format_from_config(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that the configured format is used without --format."""
        config = _config(project, "format: csv\n")
        result = cli_runner.invoke(
            main, ["list", "--graph", str(project.graph_file), "--config", config]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert result.stdout.startswith("library,url,path,license,type,errors")

    def test_output_file(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that -o writes the report to a file."""
        out = project.root / "licenses.md"
        result = cli_runner.invoke(
            main,
            ["list", "--graph", str(project.graph_file), "--format", "markdown", "-o", str(out)],
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert out.read_text().startswith("# License Report")
        assert "Report written to" in result.output

    def test_template_requires_file(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that the template format without a template is an error."""
        result = cli_runner.invoke(
            main, ["list", "--graph", str(project.graph_file), "--format", "template"]
        )

        assert result.exit_code == EXIT_ERROR
        assert "--template-file is required" in result.output

    def test_template_output(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that a user template renders the results."""
        template = project.root / "names.txt"
        template.write_text("{% for r in results %}{{ r.library }};{% endfor %}")
        result = cli_runner.invoke(
            main,
            [
                "list",
                "--graph",
                str(project.graph_file),
                "--format",
                "template",
                "--template-file",
                str(template),
            ],
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "github.com/org/repo;github.com/other/lib;" in result.stdout

    def test_graph_error(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that an invalid graph file exits with an error."""
        bad = project.root / "bad.yaml"
        bad.write_text("- not a graph\n")
        result = cli_runner.invoke(main, ["list", "--graph", str(bad)])

        assert result.exit_code == EXIT_ERROR
        assert "PackageGraphError" in result.output

    def test_verbose_and_quiet_conflict(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that -v and -q cannot be combined."""
        result = cli_runner.invoke(
            main, ["list", "--graph", str(project.graph_file), "-v", "-q"]
        )

        assert result.exit_code == 2
        assert "mutually exclusive" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_no_rules(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that check without rules is an error."""
        result = cli_runner.invoke(main, ["check", "--graph", str(project.graph_file)])

        assert result.exit_code == EXIT_ERROR
        assert "no rules configured" in result.output

    def test_allow_passes(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that allowed licenses pass the check."""
        config = _config(
            project,
            "allow:\n  - MIT\n  - BSD.*\nignore-packages:\n  - example.com/nolicense/pkg\n",
        )
        result = cli_runner.invoke(
            main, ["check", "--graph", str(project.graph_file), "--config", config]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "Passed!" in result.output
        assert "allow: MIT, BSD.*" in result.output

    def test_allow_fails_on_unlicensed(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that a library without a license violates allow rules."""
        config = _config(project, "permit: [MIT, BSD.*]\n")
        result = cli_runner.invoke(
            main,
            ["check", "--graph", str(project.graph_file), "--config", config, "--format", "json"],
        )

        assert result.exit_code == EXIT_ISSUES
        assert "1 library(ies) violate the license rules" in result.output

    def test_deny_fails(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that a denied license fails the check."""
        config = _config(project, "forbid: BSD.*\n")
        result = cli_runner.invoke(
            main, ["check", "--graph", str(project.graph_file), "--config", config, "-q"]
        )

        assert result.exit_code == EXIT_ISSUES
        assert "github.com/other/lib" in result.output

    def test_deny_passes(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that no denied license passes the check."""
        config = _config(project, "deny: [GPL.*]\n")
        result = cli_runner.invoke(
            main, ["check", "--graph", str(project.graph_file), "--config", config]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "Passed!" in result.output

    def test_rules_from_environment(
        self,
        cli_runner: CliRunner,
        project: Workspace,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that rules can come from environment variables."""
        monkeypatch.setenv("GOLICENSE_ANALYZER_DENY", "BSD.*")
        result = cli_runner.invoke(main, ["check", "--graph", str(project.graph_file)])

        assert result.exit_code == EXIT_ISSUES

    def test_invalid_config(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that conflicting rules exit with an error."""
        config = _config(project, "allow: MIT\ndeny: GPL\n")
        result = cli_runner.invoke(
            main, ["check", "--graph", str(project.graph_file), "--config", config]
        )

        assert result.exit_code == EXIT_ERROR
        assert "ConfigurationError" in result.output


class TestTreeCommand:
    """Tests for the tree command."""

    def test_ascii(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that the tree is printed with licenses and cycle markers."""
        result = cli_runner.invoke(main, ["tree", "--graph", str(project.graph_file)])

        assert result.exit_code == EXIT_SUCCESS, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "example.com/app (License: MIT)"
        assert "github.com/org/repo/pkga ... (cycle detected)" in result.stdout
        assert "fmt" not in result.stdout

    def test_json(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that the tree can be written as JSON."""
        result = cli_runner.invoke(
            main, ["tree", "--graph", str(project.graph_file), "--format", "json"]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = json.loads(result.stdout)
        assert data[0]["path"] == "example.com/app"
        assert [d["path"] for d in data[0]["dependencies"]] == [
            "github.com/org/repo/pkga",
            "github.com/other/lib",
            "example.com/nolicense/pkg",
        ]

    def test_explicit_root(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that a package argument selects the root."""
        result = cli_runner.invoke(
            main, ["tree", "github.com/other/lib", "--graph", str(project.graph_file)]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert result.stdout == "github.com/other/lib (License: BSD-3-Clause)\n"

    def test_unknown_root(self, cli_runner: CliRunner, project: Workspace) -> None:
        """Test that an unknown package exits with an error."""
        result = cli_runner.invoke(
            main, ["tree", "example.com/missing", "--graph", str(project.graph_file)]
        )

        assert result.exit_code == EXIT_ERROR
        assert "Unknown packages" in result.output
