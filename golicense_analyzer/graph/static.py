"""Package graph provider backed by a pre-computed graph document."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, ValidationError

from golicense_analyzer.exceptions import PackageGraphError
from golicense_analyzer.graph.base import PackageGraphProvider
from golicense_analyzer.models.package import PackageGraph, PackageNode


class GraphDocument(BaseModel):
    """On-disk layout of a static package graph (YAML or JSON)."""

    model_config = {"extra": "forbid"}

    roots: list[str] = Field(default_factory=list)
    goroot: Optional[Path] = None
    packages: list[PackageNode] = Field(default_factory=list)


class StaticGraphProvider(PackageGraphProvider):
    """Serves a package graph read from a file.

    Relative package directories are resolved against the directory holding
    the graph file.
    """

    def __init__(self, graph_file: Path) -> None:
        self.graph_file = Path(graph_file)

    def _read(self) -> GraphDocument:
        try:
            with open(self.graph_file, encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except OSError as e:
            raise PackageGraphError(
                f"Cannot read package graph file {self.graph_file}: {e}"
            ) from e
        except yaml.YAMLError as e:
            raise PackageGraphError(
                f"Invalid package graph file {self.graph_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise PackageGraphError(
                f"Invalid package graph file {self.graph_file}: expected a mapping"
            )
        try:
            return GraphDocument.model_validate(data)
        except ValidationError as e:
            raise PackageGraphError(
                f"Invalid package graph file {self.graph_file}: "
                f"{e.error_count()} validation error(s)"
            ) from e

    def _resolve(self, directory: Optional[Path]) -> Optional[Path]:
        if directory is None or directory.is_absolute():
            return directory
        return self.graph_file.parent / directory

    def load(self, roots: Sequence[str]) -> PackageGraph:
        """Load the graph, restricted to the requested roots.

        Raises:
            PackageGraphError: If the file is invalid or a requested root is
                not in it.
        """
        document = self._read()
        nodes = [
            node.model_copy(update={"directory": self._resolve(node.directory)})
            for node in document.packages
        ]
        known = {node.import_path for node in nodes}

        selected = list(roots) or document.roots
        missing = [root for root in selected if root not in known]
        if missing:
            raise PackageGraphError(
                f"Unknown packages in {self.graph_file}: {', '.join(missing)}"
            )
        return PackageGraph.from_nodes(
            selected, nodes, goroot=self._resolve(document.goroot)
        )
