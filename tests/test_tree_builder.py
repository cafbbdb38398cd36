"""Tests for dependency tree construction."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from golicense_analyzer.graph.static import StaticGraphProvider
from golicense_analyzer.licenses.classifier import Classifier
from golicense_analyzer.licenses.locator import LicenseLocator
from golicense_analyzer.models.package import PackageGraph, PackageNode
from golicense_analyzer.tree import DependencyTreeBuilder, build_tree

if TYPE_CHECKING:
    from conftest import Workspace


class TestDependencyTreeBuilder:
    """Tests for DependencyTreeBuilder.build."""

    def test_builds_annotated_tree(self, workspace: Workspace, classifier: Classifier) -> None:
        """Test that nodes carry their license and children."""
        builder = DependencyTreeBuilder(StaticGraphProvider(workspace.graph_file), classifier)
        tree = builder.build()

        assert tree.roots == ["example.com/app"]
        app = tree.nodes["example.com/app"]
        assert app.license == "MIT"
        assert app.children == [
            "github.com/org/repo/pkga",
            "github.com/other/lib",
            "example.com/nolicense/pkg",
        ]
        assert tree.nodes["github.com/other/lib"].license == "BSD-3-Clause"
        assert Path(tree.nodes["github.com/other/lib"].license_path).name == "COPYING"

    def test_standard_packages_pruned(
        self, workspace: Workspace, classifier: Classifier
    ) -> None:
        """Test that standard library packages are left out."""
        tree = DependencyTreeBuilder(
            StaticGraphProvider(workspace.graph_file), classifier
        ).build()
        assert "fmt" not in tree.nodes
        assert all("fmt" not in node.children for node in tree.nodes.values())

    def test_cycle_terminates(self, workspace: Workspace, classifier: Classifier) -> None:
        """Test that an import cycle resolves to the existing node."""
        tree = DependencyTreeBuilder(
            StaticGraphProvider(workspace.graph_file), classifier
        ).build()

        assert tree.nodes["github.com/org/repo/pkga"].children == ["github.com/org/repo/pkgb"]
        assert tree.nodes["github.com/org/repo/pkgb"].children == ["github.com/org/repo/pkga"]
        assert tree.total_count == 5

    def test_missing_license(self, workspace: Workspace, classifier: Classifier) -> None:
        """Test that a package without a license has empty license fields."""
        tree = DependencyTreeBuilder(
            StaticGraphProvider(workspace.graph_file), classifier
        ).build()
        node = tree.nodes["example.com/nolicense/pkg"]
        assert node.license == ""
        assert node.license_path == ""

    def test_explicit_root(self, workspace: Workspace, classifier: Classifier) -> None:
        """Test that the tree can start from any package in the graph."""
        tree = DependencyTreeBuilder(
            StaticGraphProvider(workspace.graph_file), classifier
        ).build("github.com/org/repo/pkgb")
        assert tree.roots == ["github.com/org/repo/pkgb"]
        assert set(tree.nodes) == {"github.com/org/repo/pkga", "github.com/org/repo/pkgb"}

    def test_fresh_arena_per_build(
        self, workspace: Workspace, classifier: Classifier
    ) -> None:
        """Test that every build starts from an empty arena."""
        builder = DependencyTreeBuilder(StaticGraphProvider(workspace.graph_file), classifier)
        first = builder.build()
        second = builder.build("github.com/other/lib")

        assert first.nodes is not second.nodes
        assert list(second.nodes) == ["github.com/other/lib"]


class TestBuildTree:
    """Tests for build_tree function."""

    def test_unlicensed_classification_failure(
        self, tmp_path: Path, classifier: Classifier, proprietary_text: str
    ) -> None:
        """Test that an unknown license keeps its path but no name."""
        (tmp_path / "LICENSE").write_text(proprietary_text)
        graph = PackageGraph.from_nodes(
            ["example.com/a"], [PackageNode(import_path="example.com/a", directory=tmp_path)]
        )

        tree = build_tree(graph, LicenseLocator(), classifier)

        node = tree.nodes["example.com/a"]
        assert node.license == ""
        assert node.license_path == str((tmp_path / "LICENSE").resolve())

    def test_deep_chain(self, classifier: Classifier) -> None:
        """Test that long import chains do not exhaust the stack."""
        depth = 3000
        nodes = [
            PackageNode(import_path=f"example.com/p{i}", imports=[f"example.com/p{i + 1}"])
            for i in range(depth)
        ]
        graph = PackageGraph.from_nodes(["example.com/p0"], nodes)

        tree = build_tree(graph, LicenseLocator(), classifier)

        assert tree.total_count == depth
        assert tree.nodes["example.com/p0"].children == ["example.com/p1"]

    def test_shared_dependency_single_node(self, classifier: Classifier) -> None:
        """Test that a package imported twice produces one node."""
        graph = PackageGraph.from_nodes(
            ["a"],
            [
                PackageNode(import_path="a", imports=["b", "c"]),
                PackageNode(import_path="b", imports=["c"]),
                PackageNode(import_path="c"),
            ],
        )

        tree = build_tree(graph, LicenseLocator(), classifier)

        assert tree.nodes["a"].children == ["b", "c"]
        assert tree.nodes["b"].children == ["c"]
        assert tree.total_count == 3
