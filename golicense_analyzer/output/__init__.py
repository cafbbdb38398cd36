"""Output formatters for golicense-analyzer."""
from typing import Optional, Union

from golicense_analyzer.exceptions import ConfigurationError
from golicense_analyzer.output.report_csv import CsvFormatter
from golicense_analyzer.output.report_html import HtmlFormatter
from golicense_analyzer.output.report_json import JsonFormatter
from golicense_analyzer.output.report_markdown import MarkdownFormatter
from golicense_analyzer.output.report_spdx import SpdxFormatter
from golicense_analyzer.output.report_template import TemplateFormatter
from golicense_analyzer.output.report_text import TextFormatter
from golicense_analyzer.output.tree_ascii import TreeAsciiFormatter
from golicense_analyzer.output.tree_json import TreeJsonFormatter

REPORT_FORMATS = ["text", "csv", "json", "markdown", "html", "spdx", "template"]
TREE_FORMATS = ["ascii", "json"]

StringFormatter = Union[
    CsvFormatter,
    HtmlFormatter,
    JsonFormatter,
    MarkdownFormatter,
    SpdxFormatter,
    TemplateFormatter,
]


def get_report_formatter(
    output_format: str,
    template_file: Optional[str] = None,
) -> StringFormatter:
    """Select the formatter for a non-terminal report format.

    Args:
        output_format: One of REPORT_FORMATS other than ``text``.
        template_file: Template path, required by the ``template`` format.

    Raises:
        ConfigurationError: If the format is unknown or the template file
            is missing.
    """
    if output_format == "csv":
        return CsvFormatter()
    if output_format == "json":
        return JsonFormatter()
    if output_format == "markdown":
        return MarkdownFormatter()
    if output_format == "html":
        return HtmlFormatter()
    if output_format == "spdx":
        return SpdxFormatter()
    if output_format == "template":
        if not template_file:
            raise ConfigurationError(
                "--template-file is required with --format template"
            )
        return TemplateFormatter(template_file)
    raise ConfigurationError(
        f"Unsupported output format {output_format!r}; "
        f"choose from {', '.join(REPORT_FORMATS)}"
    )


def get_tree_formatter(output_format: str) -> Union[TreeAsciiFormatter, TreeJsonFormatter]:
    """Select the formatter for a dependency tree format.

    Raises:
        ConfigurationError: If the format is unknown.
    """
    if output_format == "ascii":
        return TreeAsciiFormatter()
    if output_format == "json":
        return TreeJsonFormatter()
    raise ConfigurationError(
        f"Unsupported tree format {output_format!r}; "
        f"choose from {', '.join(TREE_FORMATS)}"
    )


__all__ = [
    "REPORT_FORMATS",
    "TREE_FORMATS",
    "CsvFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "SpdxFormatter",
    "TemplateFormatter",
    "TextFormatter",
    "TreeAsciiFormatter",
    "TreeJsonFormatter",
    "get_report_formatter",
    "get_tree_formatter",
]
