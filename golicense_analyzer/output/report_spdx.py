"""SPDX 2.3 tag-value output formatter.

See https://spdx.github.io/spdx-spec/v2.3/SPDX-tag-value-format/
"""
import re
import uuid
from datetime import datetime, timezone
from urllib.parse import urlsplit

from golicense_analyzer import __version__
from golicense_analyzer.constants import APPLICATION_NAME
from golicense_analyzer.licenses.urls import REPO_PATH_PREFIXES
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult

NOASSERTION = "NOASSERTION"

# Simple SPDX license identifiers recognised as-is (lower case)
KNOWN_SPDX_IDS = frozenset(
    {
        "0bsd",
        "agpl-3.0-only",
        "agpl-3.0-or-later",
        "apache-2.0",
        "bsd-2-clause",
        "bsd-3-clause",
        "cc0-1.0",
        "gpl-2.0-only",
        "gpl-2.0-or-later",
        "gpl-3.0-only",
        "gpl-3.0-or-later",
        "isc",
        "lgpl-2.0-only",
        "lgpl-2.0-or-later",
        "lgpl-2.1-only",
        "lgpl-2.1-or-later",
        "lgpl-3.0-only",
        "lgpl-3.0-or-later",
        "mit",
        "mit-0",
        "mpl-2.0",
        "unlicense",
    }
)

# Deprecated bare GNU identifiers map to their "-only" form
_GNU_BARE_RE = re.compile(r"^(a|l)?gpl-\d\.\d$")

_SPDXID_INVALID_RE = re.compile(r"[^A-Za-z0-9.-]")


def sanitize_spdx_id(name: str) -> str:
    """Turn a library name into a valid SPDXID suffix.

    SPDXIDs may only contain letters, digits, ``.`` and ``-``.
    """
    name = name.replace("/", "-").replace("@", "-at-").replace(":", "-col-")
    return _SPDXID_INVALID_RE.sub("-", name)


def spdx_license_id(license_name: str) -> str:
    """Map a classified license name to an SPDX identifier, or NOASSERTION."""
    lowered = license_name.lower()
    if not lowered or " and " in lowered or " or " in lowered:
        return NOASSERTION
    if lowered in KNOWN_SPDX_IDS:
        return license_name
    if _GNU_BARE_RE.match(lowered):
        return f"{license_name}-only"
    if lowered.endswith("+") and f"{lowered[:-1]}-or-later" in KNOWN_SPDX_IDS:
        return f"{license_name[:-1]}-or-later"
    return NOASSERTION


def download_location(url: str) -> str:
    """Format a license URL as an SPDX download location.

    Web URLs of files on a known git host are turned back into a VCS
    locator for their repository (``git+https://host/user/project``). Other
    URLs are used as they are.
    """
    if not url:
        return NOASSERTION
    host = urlsplit(url).hostname or ""
    prefix = REPO_PATH_PREFIXES.get(host)
    if prefix is None:
        return url
    repository, sep, _ = url.partition(f"/{prefix}")
    if not sep:
        return NOASSERTION
    return f"git+{repository}"


class SpdxFormatter:
    """Format license reports as an SPDX 2.3 tag-value document."""

    def format_report(self, report: LicenseReport) -> str:
        """Format a report as SPDX tag-value text.

        Args:
            report: The report to format.

        Returns:
            SPDX document.
        """
        created = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines = [
            "SPDXVersion: SPDX-2.3",
            "DataLicense: CC0-1.0",
            "SPDXID: SPDXRef-DOCUMENT",
            f"DocumentName: {APPLICATION_NAME}-report",
            f"DocumentNamespace: urn:uuid:{uuid.uuid4()}",
            f"Creator: Tool: {APPLICATION_NAME}-{__version__}",
            f"Created: {created}",
            "",
        ]
        for result in report.sorted_results:
            lines.extend(self._format_package(result))
        return "\n".join(lines) + "\n"

    def _format_package(self, result: LicenseResult) -> list[str]:
        license_id = spdx_license_id(result.license)
        return [
            f"##### Package: {result.library}",
            "",
            f"PackageName: {result.library}",
            f"SPDXID: SPDXRef-Package-{sanitize_spdx_id(result.library)}",
            f"PackageDownloadLocation: {download_location(result.url)}",
            "FilesAnalyzed: false",
            f"PackageLicenseConcluded: {license_id}",
            f"PackageLicenseDeclared: {license_id}",
            f"PackageLicenseComments: Source path: {result.path or NOASSERTION}",
            f"PackageCopyrightText: {NOASSERTION}",
            "",
        ]
