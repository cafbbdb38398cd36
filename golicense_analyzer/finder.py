"""License finder: streams one license result per library."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Callable, Optional, Sequence

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from golicense_analyzer.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_GIT_REMOTES,
    MAX_CONCURRENT_CLASSIFICATIONS,
)
from golicense_analyzer.exceptions import (
    AggregateError,
    ClassificationError,
    LicenseURLError,
)
from golicense_analyzer.graph.base import PackageGraphProvider
from golicense_analyzer.graph.golist import GoListProvider
from golicense_analyzer.graph.static import StaticGraphProvider
from golicense_analyzer.licenses.classifier import (
    Classifier,
    CorpusSource,
    LicenseType,
    default_corpus_archive,
    fetch_corpus_archive,
)
from golicense_analyzer.licenses.library import aggregate_libraries, unvendor
from golicense_analyzer.licenses.locator import LicenseLocator, LicensePathCache
from golicense_analyzer.licenses.urls import find_license_url
from golicense_analyzer.models.library import Library
from golicense_analyzer.models.scan import LicenseResult

logger = logging.getLogger(__name__)

ResultStream = AsyncIterator[LicenseResult]


async def load_classifier(
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    corpus_source: CorpusSource = default_corpus_archive,
    corpus_url: Optional[str] = None,
) -> Classifier:
    """Build a classifier from a local corpus source or a corpus URL.

    Raises:
        ClassifierError: If the corpus cannot be loaded.
        NetworkError: If downloading the corpus fails.
    """
    source = corpus_source
    if corpus_url:
        archive = await fetch_corpus_archive(corpus_url)

        def source() -> bytes:
            return archive

    return await asyncio.to_thread(
        Classifier.from_corpus_source, confidence_threshold, source
    )


def resolve_library(
    library: Library,
    classifier: Classifier,
    git_remotes: Sequence[str],
) -> LicenseResult:
    """Resolve the URL and license of one library.

    Failures only affect this library and are recorded on the result.

    Args:
        library: Library to resolve.
        classifier: Shared, read-only classifier.
        git_remotes: Git remote names tried, in order, for the URL.

    Returns:
        License result for the library.
    """
    url = ""
    license_name = ""
    license_type = ""
    errors: list[str] = []

    if library.has_license:
        try:
            url = find_license_url(library, git_remotes)
        except (LicenseURLError, AggregateError) as e:
            errors.append(f"failed to locate license URL ({library.license_path}): {e}")

        try:
            license_name, classification = classifier.identify(library.license_path)
            license_type = classification.value
        except ClassificationError as e:
            errors.append(f"failed to identify license ({library.license_path}): {e}")
            license_type = LicenseType.UNKNOWN.value

    for error in errors:
        logger.debug("%s: %s", library.name, error)

    return LicenseResult(
        library=unvendor(library.name),
        url=url,
        path=library.license_path,
        license=license_name,
        type=license_type,
        errors=errors,
    )


class LicenseFinder:
    """Finds the licenses of a project's dependencies."""

    def __init__(
        self,
        paths: Sequence[str],
        git_remotes: Optional[Sequence[str]] = None,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        provider: Optional[PackageGraphProvider] = None,
        corpus_source: CorpusSource = default_corpus_archive,
        corpus_url: Optional[str] = None,
        license_file_patterns: Optional[Sequence[str]] = None,
        max_concurrency: int = MAX_CONCURRENT_CLASSIFICATIONS,
    ) -> None:
        """Initialize the finder.

        Args:
            paths: Root import paths (or patterns) to scan.
            git_remotes: Git remotes tried, in order, to build license URLs.
            confidence_threshold: Minimum classifier confidence (0-1).
            provider: Package graph provider. Defaults to ``go list``.
            corpus_source: Callable returning the license corpus archive.
            corpus_url: If set, the corpus archive is downloaded from this URL
                instead of read from ``corpus_source``.
            license_file_patterns: Regexes for license file names.
            max_concurrency: Maximum number of libraries resolved at once.
        """
        self.paths = list(paths)
        self.git_remotes = (
            list(git_remotes) if git_remotes is not None else list(DEFAULT_GIT_REMOTES)
        )
        self.confidence_threshold = confidence_threshold
        self.provider = provider if provider is not None else GoListProvider()
        self.corpus_source = corpus_source
        self.corpus_url = corpus_url
        self.license_file_patterns = license_file_patterns
        self.max_concurrency = max_concurrency
        self.libraries: list[Library] = []

    async def load_classifier(self) -> Classifier:
        """Build the classifier for one scan."""
        return await load_classifier(
            self.confidence_threshold, self.corpus_source, self.corpus_url
        )

    async def find(self) -> ResultStream:
        """Prepare a scan and return its result stream.

        All setup happens before this returns, so fatal errors are raised
        here rather than from the stream. The stream yields exactly one
        result per library, in completion order; closing it early cancels
        outstanding work.

        Returns:
            Async iterator of license results.

        Raises:
            ClassifierError: If the classifier cannot be built.
            PackageGraphError: If the package graph cannot be loaded.
            LicenseLocatorError: If the license file patterns are invalid.
            NetworkError: If downloading the corpus fails.
        """
        classifier = await self.load_classifier()
        graph = await asyncio.to_thread(self.provider.load, self.paths)
        locator = LicenseLocator(self.license_file_patterns, LicensePathCache())
        self.libraries = await asyncio.to_thread(aggregate_libraries, graph, locator)
        logger.debug(
            "Found %d libraries in %d packages",
            len(self.libraries),
            len(graph.packages),
        )
        return self._stream(list(self.libraries), classifier)

    async def _stream(
        self,
        libraries: list[Library],
        classifier: Classifier,
    ) -> ResultStream:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def resolve_one(library: Library) -> LicenseResult:
            async with semaphore:
                return await asyncio.to_thread(
                    resolve_library, library, classifier, self.git_remotes
                )

        tasks = [asyncio.create_task(resolve_one(lib)) for lib in libraries]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


async def collect_results(
    stream: ResultStream,
    on_result: Optional[Callable[[LicenseResult], None]] = None,
) -> list[LicenseResult]:
    """Drain a result stream into a list.

    Args:
        stream: Result stream returned by ``LicenseFinder.find()``.
        on_result: Optional callback invoked for every result.

    Returns:
        All results, sorted by library name.
    """
    results: list[LicenseResult] = []
    async for result in stream:
        results.append(result)
        if on_result is not None:
            on_result(result)
    return sorted(results, key=lambda r: (r.library, r.path))


async def scan_licenses(
    finder: LicenseFinder,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[LicenseResult]:
    """Run a scan to completion.

    Args:
        finder: Configured license finder.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress indicator.

    Returns:
        All license results, sorted by library name.
    """
    stream = await finder.find()
    total = len(finder.libraries)

    if console is None or not show_progress or total == 0:
        return await collect_results(stream)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task(
            f"Classifying licenses for {total} libraries...",
            total=total,
        )
        return await collect_results(
            stream, on_result=lambda _: progress.advance(task_id)
        )


def default_provider(graph_file: Optional[Path] = None) -> PackageGraphProvider:
    """Select the static provider for a graph file, else ``go list``."""
    if graph_file is not None:
        return StaticGraphProvider(graph_file)
    return GoListProvider()
