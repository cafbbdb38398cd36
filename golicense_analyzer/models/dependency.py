"""Dependency tree models for golicense-analyzer.

Nodes live in an arena keyed by import path; edges are stored as import
paths rather than object references, so a cycle in the package graph never
turns into a reference cycle between models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DependencyNode(BaseModel):
    """A package in the dependency tree, annotated with its license."""

    path: str = Field(description="Import path of the package")
    license: str = Field(default="", description="Classified license name")
    license_path: str = Field(default="", description="Path of the license file")
    children: list[str] = Field(
        default_factory=list,
        description="Import paths of direct, non-standard dependencies",
    )

    model_config = {"extra": "forbid"}


class DependencyTree(BaseModel):
    """Dependency trees for one build, sharing a single node arena."""

    roots: list[str] = Field(
        default_factory=list,
        description="Import paths of the root nodes",
    )
    nodes: dict[str, DependencyNode] = Field(
        default_factory=dict,
        description="Arena of all nodes keyed by import path",
    )

    model_config = {"extra": "forbid"}

    @property
    def root_nodes(self) -> list[DependencyNode]:
        """Root nodes in the order they were requested."""
        return [self.nodes[path] for path in self.roots]

    def get(self, path: str) -> Optional[DependencyNode]:
        """Look up a node by import path."""
        return self.nodes.get(path)

    def children_of(self, node: DependencyNode) -> list[DependencyNode]:
        """Resolve a node's child edges to nodes, preserving order."""
        return [self.nodes[path] for path in node.children if path in self.nodes]

    @property
    def total_count(self) -> int:
        """Number of distinct packages in the tree."""
        return len(self.nodes)
