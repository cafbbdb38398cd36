"""Base package graph provider interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from golicense_analyzer.models.package import PackageGraph


class PackageGraphProvider(ABC):
    """Abstract base class for package graph providers.

    A provider turns a set of root import paths into the transitive package
    graph that the license finder and tree builder walk.
    """

    @abstractmethod
    def load(self, roots: Sequence[str]) -> PackageGraph:
        """Load the package graph for the given roots.

        Args:
            roots: Root import paths or patterns. An empty sequence selects
                the provider's default roots.

        Returns:
            The transitive package graph.

        Raises:
            PackageGraphError: If the graph cannot be loaded.
        """
