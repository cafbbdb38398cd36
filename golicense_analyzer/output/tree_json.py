"""JSON output formatter for dependency trees."""
import json
from typing import Any, Union

from golicense_analyzer.models.dependency import DependencyNode, DependencyTree

INDENT = 2

# Pending work: a node to write at an indent, or literal text
_Item = Union[tuple[DependencyNode, int], str]


class TreeJsonFormatter:
    """Format dependency trees as nested JSON.

    A package that was already emitted is written as
    ``{"path": ..., "cycle": true}`` instead of being expanded again.

    The document is written piece by piece from an explicit stack, so trees
    deeper than the interpreter's recursion limit still render. The layout
    matches ``json.dumps(..., indent=2)``.
    """

    def format_dependency_tree(self, tree: DependencyTree) -> str:
        """Format a dependency tree as a JSON string.

        Args:
            tree: The dependency tree to format.

        Returns:
            JSON array with one object per root.
        """
        roots = tree.root_nodes
        if not roots:
            return "[]"

        out: list[str] = ["[\n"]
        stack: list[_Item] = ["\n]"]
        self._push_items(stack, roots, INDENT)
        emitted: set[str] = set()
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                out.append(item)
                continue
            node, indent = item
            self._write_node(tree, node, indent, emitted, out, stack)
        return "".join(out)

    def _push_items(
        self, stack: list[_Item], nodes: list[DependencyNode], indent: int
    ) -> None:
        for index in range(len(nodes) - 1, -1, -1):
            stack.append((nodes[index], indent))
            if index:
                stack.append(",\n")

    def _write_node(
        self,
        tree: DependencyTree,
        node: DependencyNode,
        indent: int,
        emitted: set[str],
        out: list[str],
        stack: list[_Item],
    ) -> None:
        pad = " " * indent
        field_pad = " " * (indent + INDENT)
        fields: list[tuple[str, Any]] = [("path", node.path)]
        children: list[DependencyNode] = []
        if node.path in emitted:
            fields.append(("cycle", True))
        else:
            emitted.add(node.path)
            if node.license:
                fields.append(("license", node.license))
            if node.license_path:
                fields.append(("license_path", node.license_path))
            children = tree.children_of(node)

        lines = [f"{field_pad}{json.dumps(key)}: {json.dumps(value)}" for key, value in fields]
        if not children:
            out.append(f"{pad}{{\n" + ",\n".join(lines) + f"\n{pad}}}")
            return

        lines.append(f'{field_pad}"dependencies": [')
        out.append(f"{pad}{{\n" + ",\n".join(lines) + "\n")
        stack.append(f"\n{field_pad}]\n{pad}}}")
        self._push_items(stack, children, indent + 2 * INDENT)
