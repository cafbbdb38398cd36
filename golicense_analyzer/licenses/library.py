"""Grouping of packages into libraries by shared license file."""
from __future__ import annotations

import logging
from collections import OrderedDict

from golicense_analyzer.exceptions import LicenseLocatorError
from golicense_analyzer.licenses.locator import LicenseLocator
from golicense_analyzer.models.library import Library
from golicense_analyzer.models.package import PackageGraph, PackageNode

logger = logging.getLogger(__name__)

VENDOR_SEPARATOR = "/vendor/"


def unvendor(import_path: str) -> str:
    """Remove a ``.../vendor/`` prefix from an import path.

    >>> unvendor("example.com/app/vendor/github.com/user/lib")
    'github.com/user/lib'
    """
    _, sep, vendoree = import_path.partition(VENDOR_SEPARATOR)
    return vendoree if sep else import_path


def _license_path_for(node: PackageNode, locator: LicenseLocator) -> str:
    """Locate the license covering a package, degrading failures to "none"."""
    if node.directory is None:
        logger.debug("%s has no source directory; treating as unlicensed", node.import_path)
        return ""
    try:
        return locator.find(node.directory)
    except LicenseLocatorError as e:
        logger.warning("Failed to find license for %s: %s", node.import_path, e)
        return ""


def aggregate_libraries(
    graph: PackageGraph,
    locator: LicenseLocator,
) -> list[Library]:
    """Group the packages of a graph into libraries.

    Every non-standard package reachable from the graph roots ends up in
    exactly one library. Packages sharing a license file form one library;
    packages without a license file each form their own library.

    Args:
        graph: Package graph to aggregate.
        locator: License locator (with its per-scan cache).

    Returns:
        Libraries sorted by name, then license path.
    """
    by_license: OrderedDict[str, list[str]] = OrderedDict()
    for node in graph.walk():
        if node.other_files:
            logger.warning(
                "%s contains non-source files that can't be inspected for "
                "further dependencies: %s",
                node.import_path,
                ", ".join(node.other_files),
            )
        license_path = _license_path_for(node, locator)
        by_license.setdefault(license_path, []).append(node.import_path)

    libraries: list[Library] = []
    for license_path, import_paths in by_license.items():
        if not license_path:
            libraries.extend(Library(packages=[path]) for path in import_paths)
            continue

        library = Library(license_path=license_path, packages=import_paths)
        if not library.name:
            logger.warning(
                "Packages covered by %s share no common import path: %s",
                license_path,
                ", ".join(import_paths),
            )
        libraries.append(library)

    libraries.sort(key=lambda lib: (lib.name, lib.license_path))
    return libraries
