"""Package graph provider backed by ``go list``."""
from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

from golicense_analyzer.constants import GRAPH_LOAD_TIMEOUT
from golicense_analyzer.exceptions import PackageGraphError
from golicense_analyzer.graph.base import PackageGraphProvider
from golicense_analyzer.models.package import PackageGraph, PackageNode

logger = logging.getLogger(__name__)

DEFAULT_ROOTS = ["."]

# Non-Go sources whose dependencies cannot be followed
_UNINSPECTABLE_FIELDS = ("OtherFiles", "CFiles", "CXXFiles", "SFiles")


def _iter_json_objects(stream: str) -> Iterator[dict[str, Any]]:
    """Split the concatenated JSON objects printed by ``go list -json``."""
    decoder = json.JSONDecoder()
    index = 0
    length = len(stream)
    while True:
        while index < length and stream[index].isspace():
            index += 1
        if index >= length:
            return
        obj, index = decoder.raw_decode(stream, index)
        yield obj


def _package_errors(entry: dict[str, Any]) -> list[str]:
    """Collect the error messages attached to a ``go list`` entry."""
    messages = []
    error = entry.get("Error")
    if error:
        messages.append(error.get("Err", str(error)))
    for dep_error in entry.get("DepsErrors") or []:
        messages.append(dep_error.get("Err", str(dep_error)))
    return messages


class GoListProvider(PackageGraphProvider):
    """Loads package graphs by running ``go list -deps -json``."""

    def __init__(
        self,
        working_dir: Optional[Path] = None,
        go_binary: str = "go",
        timeout: float = GRAPH_LOAD_TIMEOUT,
    ) -> None:
        """Initialize the provider.

        Args:
            working_dir: Directory (module) to run ``go`` in. Defaults to the
                current directory.
            go_binary: Name or path of the go executable.
            timeout: Deadline in seconds for each ``go`` invocation.
        """
        self.working_dir = working_dir
        self.go_binary = go_binary
        self.timeout = timeout

    def _run(self, args: list[str]) -> str:
        command = [self.go_binary, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise PackageGraphError(
                f"'{self.go_binary}' not found; install Go or use --graph"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PackageGraphError(
                f"'{' '.join(command)}' timed out after {self.timeout:g}s"
            ) from e

        if completed.returncode != 0 and not completed.stdout:
            raise PackageGraphError(
                f"'{' '.join(command)}' failed with exit code "
                f"{completed.returncode}: {completed.stderr.strip()}"
            )
        return completed.stdout

    def goroot(self) -> Optional[Path]:
        """Return the toolchain root reported by ``go env GOROOT``."""
        output = self._run(["env", "GOROOT"]).strip()
        return Path(output) if output else None

    def load(self, roots: Sequence[str]) -> PackageGraph:
        """Load the package graph for the given patterns.

        Raises:
            PackageGraphError: If ``go`` fails or any package has errors.
                Every package error is listed in the message.
        """
        patterns = list(roots) or list(DEFAULT_ROOTS)
        output = self._run(["list", "-e", "-deps", "-json", "--", *patterns])

        try:
            entries = list(_iter_json_objects(output))
        except json.JSONDecodeError as e:
            raise PackageGraphError(f"Invalid 'go list' output: {e}") from e

        nodes: list[PackageNode] = []
        root_paths: list[str] = []
        errors: list[str] = []
        for entry in entries:
            import_path = entry.get("ImportPath", "")
            for message in _package_errors(entry):
                errors.append(f"{import_path}: {message}")

            directory = entry.get("Dir")
            other_files: list[str] = []
            for field in _UNINSPECTABLE_FIELDS:
                other_files.extend(entry.get(field) or [])

            nodes.append(
                PackageNode(
                    import_path=import_path,
                    directory=Path(directory) if directory else None,
                    imports=entry.get("Imports") or [],
                    standard=bool(entry.get("Standard", False)),
                    other_files=other_files,
                )
            )
            if not entry.get("DepOnly", False):
                root_paths.append(import_path)

        if errors:
            raise PackageGraphError(
                f"errors for {patterns}:\n" + "\n".join(errors)
            )
        if not root_paths:
            raise PackageGraphError(f"no packages matched {patterns}")

        return PackageGraph.from_nodes(root_paths, nodes, goroot=self.goroot())
