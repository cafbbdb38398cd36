"""Package graph models.

The graph is produced by a package graph provider and stays immutable for the
duration of one scan.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel, Field


class PackageNode(BaseModel):
    """A single package in the dependency graph."""

    model_config = {"extra": "forbid", "frozen": True}

    import_path: str = Field(description="Import path identifying the package")
    directory: Optional[Path] = Field(
        default=None,
        description="Source directory (None when no source is available)",
    )
    imports: list[str] = Field(
        default_factory=list,
        description="Import paths of direct dependencies, in declared order",
    )
    standard: bool = Field(
        default=False,
        description="True if the package ships with the toolchain",
    )
    other_files: list[str] = Field(
        default_factory=list,
        description="Non-source files that cannot be inspected for dependencies",
    )


class PackageGraph(BaseModel):
    """Transitive package graph for a set of root import paths."""

    model_config = {"extra": "forbid"}

    roots: list[str] = Field(
        default_factory=list,
        description="Import paths of the root packages",
    )
    packages: dict[str, PackageNode] = Field(
        default_factory=dict,
        description="All known packages keyed by import path",
    )
    goroot: Optional[Path] = Field(
        default=None,
        description="Toolchain root; packages below it are standard library",
    )

    @classmethod
    def from_nodes(
        cls,
        roots: list[str],
        nodes: list[PackageNode],
        goroot: Optional[Path] = None,
    ) -> PackageGraph:
        """Build a graph from a flat list of nodes."""
        return cls(
            roots=roots,
            packages={node.import_path: node for node in nodes},
            goroot=goroot,
        )

    def get(self, import_path: str) -> Optional[PackageNode]:
        """Look up a package by import path."""
        return self.packages.get(import_path)

    def is_standard(self, node: PackageNode) -> bool:
        """Check whether a package belongs to the standard library.

        Args:
            node: Package to check.

        Returns:
            True if the package is flagged as standard, or its source
            directory lies under the toolchain root.
        """
        if node.standard:
            return True
        if self.goroot is None or node.directory is None:
            return False
        return node.directory == self.goroot or self.goroot in node.directory.parents

    def walk(self) -> Iterator[PackageNode]:
        """Visit every non-standard package reachable from the roots.

        Depth-first pre-order; each package is yielded once. Standard
        packages are neither yielded nor descended into.
        """
        seen: set[str] = set()
        stack: list[str] = list(reversed(self.roots))
        while stack:
            import_path = stack.pop()
            if import_path in seen:
                continue
            seen.add(import_path)
            node = self.packages.get(import_path)
            if node is None or self.is_standard(node):
                continue
            yield node
            stack.extend(
                dep for dep in reversed(node.imports) if dep not in seen
            )
