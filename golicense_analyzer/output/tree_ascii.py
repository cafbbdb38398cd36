"""ASCII output formatter for dependency trees."""
from golicense_analyzer.models.dependency import DependencyNode, DependencyTree

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

CYCLE_MARKER = "(cycle detected)"


class TreeAsciiFormatter:
    """Format dependency trees with box-drawing connectors.

    Every package is expanded once; later occurrences (shared dependencies
    and cycles) are printed with a cycle marker instead of their children.
    """

    def format_dependency_tree(self, tree: DependencyTree) -> str:
        """Format a dependency tree as text.

        Args:
            tree: The dependency tree to format.

        Returns:
            One line per node, roots unindented.
        """
        lines: list[str] = []
        expanded: set[str] = set()
        # (node, connector, prefix for its children), popped in pre-order
        stack = [(root, "", "") for root in reversed(tree.root_nodes)]
        while stack:
            node, connector, child_prefix = stack.pop()
            if node.path in expanded:
                lines.append(f"{connector}{node.path} ... {CYCLE_MARKER}")
                continue
            expanded.add(node.path)
            lines.append(f"{connector}{self._label(node)}")

            children = tree.children_of(node)
            last = len(children) - 1
            for index in range(last, -1, -1):
                is_last = index == last
                stack.append(
                    (
                        children[index],
                        child_prefix + (LAST_BRANCH if is_last else BRANCH),
                        child_prefix + (SPACE if is_last else PIPE),
                    )
                )
        return "\n".join(lines) + "\n" if lines else ""

    def _label(self, node: DependencyNode) -> str:
        if node.license:
            return f"{node.path} (License: {node.license})"
        if node.license_path:
            return f"{node.path} (License Path: {node.license_path})"
        return node.path
