"""Shared fixtures for golicense-analyzer tests."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import NamedTuple

import pytest
import yaml
from click.testing import CliRunner

from golicense_analyzer.licenses.classifier import Classifier

MIT_TEXT = textwrap.dedent(
    """\
    Copyright (c) 2021 Jane Doe

    Permission is hereby granted, free of charge, to any person obtaining a copy
    of this software and associated documentation files (the "Software"), to deal
    in the Software without restriction, including without limitation the rights
    to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
    copies of the Software, and to permit persons to whom the Software is
    furnished to do so, subject to the following conditions:

    The above copyright notice and this permission notice shall be included in all
    copies or substantial portions of the Software.

    THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
    IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
    FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
    AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
    LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
    OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
    SOFTWARE.
    """
)

BSD_3_CLAUSE_TEXT = textwrap.dedent(
    """\
    Copyright (c) 2009 The Go Authors. All rights reserved.

    Redistribution and use in source and binary forms, with or without
    modification, are permitted provided that the following conditions are met:

    1. Redistributions of source code must retain the above copyright notice, this
       list of conditions and the following disclaimer.

    2. Redistributions in binary form must reproduce the above copyright notice,
       this list of conditions and the following disclaimer in the documentation
       and/or other materials provided with the distribution.

    3. Neither the name of the copyright holder nor the names of its
       contributors may be used to endorse or promote products derived from
       this software without specific prior written permission.

    THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
    AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
    IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
    DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
    FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
    DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
    SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
    CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
    OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
    OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
    """
)

PROPRIETARY_TEXT = "Copyright 2020 ACME Corp. All rights reserved. Do not distribute.\n"


class Workspace(NamedTuple):
    """On-disk layout of a small Go module graph."""

    root: Path
    graph_file: Path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def classifier() -> Classifier:
    """Classifier over the bundled corpus."""
    return Classifier()


@pytest.fixture
def mit_text() -> str:
    """Full text of an MIT license file."""
    return MIT_TEXT


@pytest.fixture
def bsd_text() -> str:
    """Full text of a BSD-3-Clause license file."""
    return BSD_3_CLAUSE_TEXT


@pytest.fixture
def proprietary_text() -> str:
    """License text that matches nothing in the corpus."""
    return PROPRIETARY_TEXT


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Create package directories, license files and a static graph file.

    Layout::

        example.com/app            app/LICENSE (MIT)
        github.com/org/repo/pkga   mod/github.com/org/repo/LICENSE (MIT)
        github.com/org/repo/pkgb   (same license file; imports pkga: a cycle)
        github.com/other/lib       mod/github.com/other/lib/COPYING (BSD)
        example.com/nolicense/pkg  no license file
        fmt                        standard library under goroot/
    """
    _write(tmp_path / "app" / "LICENSE", MIT_TEXT)
    _write(tmp_path / "app" / "main.go", "package main\n")
    _write(tmp_path / "mod" / "github.com" / "org" / "repo" / "LICENSE", MIT_TEXT)
    _write(tmp_path / "mod" / "github.com" / "org" / "repo" / "pkga" / "a.go", "package pkga\n")
    _write(tmp_path / "mod" / "github.com" / "org" / "repo" / "pkgb" / "b.go", "package pkgb\n")
    _write(tmp_path / "mod" / "github.com" / "other" / "lib" / "COPYING", BSD_3_CLAUSE_TEXT)
    _write(tmp_path / "mod" / "example.com" / "nolicense" / "pkg" / "p.go", "package pkg\n")
    _write(tmp_path / "goroot" / "src" / "fmt" / "print.go", "package fmt\n")

    graph = {
        "roots": ["example.com/app"],
        "goroot": "goroot",
        "packages": [
            {
                "import_path": "example.com/app",
                "directory": "app",
                "imports": [
                    "fmt",
                    "github.com/org/repo/pkga",
                    "github.com/other/lib",
                    "example.com/nolicense/pkg",
                ],
            },
            {
                "import_path": "fmt",
                "directory": "goroot/src/fmt",
                "standard": True,
            },
            {
                "import_path": "github.com/org/repo/pkga",
                "directory": "mod/github.com/org/repo/pkga",
                "imports": ["fmt", "github.com/org/repo/pkgb"],
            },
            {
                "import_path": "github.com/org/repo/pkgb",
                "directory": "mod/github.com/org/repo/pkgb",
                "imports": ["github.com/org/repo/pkga"],
            },
            {
                "import_path": "github.com/other/lib",
                "directory": "mod/github.com/other/lib",
            },
            {
                "import_path": "example.com/nolicense/pkg",
                "directory": "mod/example.com/nolicense/pkg",
            },
        ],
    }
    graph_file = _write(tmp_path / "graph.yaml", yaml.safe_dump(graph))
    return Workspace(root=tmp_path, graph_file=graph_file)
