"""Dependency tree construction with per-package license annotation."""
from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from golicense_analyzer.exceptions import ClassificationError, LicenseLocatorError
from golicense_analyzer.graph.base import PackageGraphProvider
from golicense_analyzer.licenses.classifier import Classifier
from golicense_analyzer.licenses.locator import LicenseLocator, LicensePathCache
from golicense_analyzer.models.dependency import DependencyNode, DependencyTree
from golicense_analyzer.models.package import PackageGraph, PackageNode

logger = logging.getLogger(__name__)


class DependencyTreeBuilder:
    """Builds license-annotated dependency trees from a package graph."""

    def __init__(
        self,
        provider: PackageGraphProvider,
        classifier: Classifier,
        license_file_patterns: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            provider: Package graph provider.
            classifier: Classifier used to name each package's license.
            license_file_patterns: Regexes for license file names.
        """
        self.provider = provider
        self.classifier = classifier
        self.license_file_patterns = license_file_patterns

    def build(self, *roots: str) -> DependencyTree:
        """Build the dependency tree for the given roots.

        Every call starts from an empty arena and a fresh license cache.

        Raises:
            PackageGraphError: If the package graph cannot be loaded.
        """
        graph = self.provider.load(list(roots))
        locator = LicenseLocator(self.license_file_patterns, LicensePathCache())
        return build_tree(graph, locator, self.classifier)


def _annotate(
    node: DependencyNode,
    package: PackageNode,
    locator: LicenseLocator,
    classifier: Classifier,
) -> None:
    """Fill in a node's license fields; failures leave them empty."""
    if package.directory is None:
        return
    try:
        license_path = locator.find(package.directory)
    except LicenseLocatorError as e:
        logger.warning("Failed to find license for %s: %s", package.import_path, e)
        return
    if not license_path:
        return
    node.license_path = license_path
    try:
        node.license, _ = classifier.identify(license_path)
    except ClassificationError as e:
        logger.debug("Failed to identify license for %s: %s", package.import_path, e)


def build_tree(
    graph: PackageGraph,
    locator: LicenseLocator,
    classifier: Classifier,
) -> DependencyTree:
    """Build a dependency tree over an already loaded graph.

    Nodes are registered in the arena before their children are visited, so
    a cycle in the graph resolves to the node already being built. The walk
    uses an explicit stack, so deep graphs do not hit the recursion limit.
    Standard packages, and imports missing from the graph, produce no node.
    Children keep the graph's import order.

    Args:
        graph: Package graph to walk.
        locator: License locator for this build.
        classifier: Classifier used to name licenses.

    Returns:
        Tree whose roots are the graph roots that produced a node.
    """
    tree = DependencyTree()
    # (node, remaining imports) for every node whose children are pending
    stack: list[tuple[DependencyNode, Iterator[str]]] = []

    def enter(import_path: str) -> Optional[DependencyNode]:
        existing = tree.nodes.get(import_path)
        if existing is not None:
            return existing
        package = graph.get(import_path)
        if package is None or graph.is_standard(package):
            return None

        node = DependencyNode(path=import_path)
        tree.nodes[import_path] = node
        _annotate(node, package, locator, classifier)
        stack.append((node, iter(package.imports)))
        return node

    for root in graph.roots:
        if enter(root) is None:
            continue
        if root not in tree.roots:
            tree.roots.append(root)

        while stack:
            parent, pending = stack[-1]
            dep = next(pending, None)
            if dep is None:
                stack.pop()
                continue
            child = enter(dep)
            if child is not None:
                parent.children.append(child.path)
    return tree
