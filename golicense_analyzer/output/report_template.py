"""Output formatter driven by a user-supplied Jinja2 template."""
from pathlib import Path
from typing import Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from golicense_analyzer.exceptions import ConfigurationError
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.output.report_json import report_metadata


class TemplateFormatter:
    """Format license reports with a Jinja2 template file.

    The template receives ``results`` (sorted license results, each with
    ``library``, ``url``, ``path``, ``license``, ``type`` and ``errors``),
    ``violations``, ``passed`` (None when no rules were evaluated) and
    ``metadata``. Templates ending in ``.html`` or ``.xml`` are autoescaped.
    """

    def __init__(self, template_file: Union[str, Path]) -> None:
        """Load the template.

        Args:
            template_file: Path of the Jinja2 template.

        Raises:
            ConfigurationError: If the template is missing or invalid.
        """
        path = Path(template_file)
        if not path.is_file():
            raise ConfigurationError(f"Template file not found: {path}")

        env = Environment(
            loader=FileSystemLoader(str(path.parent)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        try:
            self._template = env.get_template(path.name)
        except TemplateNotFound as e:
            raise ConfigurationError(f"Template file not found: {path}") from e
        except TemplateError as e:
            raise ConfigurationError(f"Invalid template {path}: {e}") from e
        self.template_file = path

    def format_report(self, report: LicenseReport) -> str:
        """Render a report with the template.

        Raises:
            ConfigurationError: If rendering fails.
        """
        evaluation = report.evaluation
        try:
            return self._template.render(
                results=report.sorted_results,
                violations=evaluation.violations if evaluation else [],
                passed=evaluation.passed if evaluation else None,
                metadata=report_metadata(),
            )
        except TemplateError as e:
            raise ConfigurationError(
                f"Failed to render template {self.template_file}: {e}"
            ) from e
