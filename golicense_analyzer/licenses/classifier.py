"""License text classification.

Identifies the license in a file by comparing its normalized text with a
corpus of known license texts. The corpus is supplied as an archive of
bytes (a YAML document) so alternative corpora can be loaded from disk or
downloaded.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Callable, Optional

import httpx
import yaml
from pydantic import BaseModel, Field, ValidationError

from golicense_analyzer.constants import DEFAULT_CONFIDENCE_THRESHOLD
from golicense_analyzer.exceptions import (
    ClassificationError,
    ClassifierError,
    NetworkError,
)

logger = logging.getLogger(__name__)

CORPUS_RESOURCE = "data/licenses.yaml"

# Word n-gram size used to compare texts
SHINGLE_SIZE = 3

# Callable returning the raw bytes of a corpus archive
CorpusSource = Callable[[], bytes]


class LicenseType(Enum):
    """Categories of licenses by the obligations they impose."""

    RESTRICTED = "restricted"
    RECIPROCAL = "reciprocal"
    NOTICE = "notice"
    PERMISSIVE = "permissive"
    UNENCUMBERED = "unencumbered"
    FORBIDDEN = "forbidden"
    UNKNOWN = "unknown"


class CorpusEntry(BaseModel):
    """A known license text."""

    model_config = {"extra": "forbid"}

    type: LicenseType = Field(description="License category")
    text: str = Field(min_length=1, description="Canonical license text")


def _normalize_license_text(text: str) -> str:
    """Normalize license text for comparison.

    - Replace years, e-mail addresses and URLs with placeholders
    - Drop copyright holder names
    - Drop list markers such as ``1.``, ``*`` or ``(a)``
    - Strip punctuation, collapse whitespace and lowercase

    Args:
        text: Raw license text.

    Returns:
        Normalized text for comparison.
    """
    # Replace year patterns: 2024, 2020-2024, (c) 2024, etc.
    text = re.sub(r"\d{4}(-\d{4})?", "[YEAR]", text)
    # Replace common placeholder patterns
    text = re.sub(r"\[year\]", "[YEAR]", text, flags=re.IGNORECASE)
    text = re.sub(r"\[fullname\]", "[HOLDER]", text, flags=re.IGNORECASE)
    # Replace email addresses
    text = re.sub(r"<[^>]+@[^>]+>", "[EMAIL]", text)
    # Replace URLs
    text = re.sub(r"https?://[^\s]+", "[URL]", text)
    # "Copyright (c) 2024 John Doe" -> "Copyright (c) [YEAR] [HOLDER]"
    text = re.sub(
        r"(copyright\s*(?:\(c\))?\s*\[YEAR\])[,\s]+[^\n]+",
        r"\1 [HOLDER]",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(
        r"^[ \t]*(?:\d+\.|[*\u2022-]|\(?[a-z0-9]\))[ \t]+",
        "",
        text,
        flags=re.MULTILINE | re.IGNORECASE,
    )
    text = re.sub(r"[^\w\s\[\]]", " ", text)
    return " ".join(text.split()).lower()


def _shingles(text: str) -> frozenset[tuple[str, ...]]:
    """Split normalized text into overlapping word n-grams."""
    words = text.split()
    if len(words) < SHINGLE_SIZE:
        return frozenset([tuple(words)]) if words else frozenset()
    return frozenset(
        tuple(words[i : i + SHINGLE_SIZE]) for i in range(len(words) - SHINGLE_SIZE + 1)
    )


def load_corpus(archive: bytes) -> dict[str, CorpusEntry]:
    """Parse a corpus archive.

    Args:
        archive: YAML document mapping license names to ``type`` and ``text``.

    Returns:
        Corpus entries keyed by license name.

    Raises:
        ClassifierError: If the archive is not a valid corpus.
    """
    try:
        data = yaml.safe_load(archive.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        raise ClassifierError(f"Invalid license corpus archive: {e}") from e

    if not isinstance(data, dict) or not data:
        raise ClassifierError("Invalid license corpus archive: expected a mapping")

    corpus: dict[str, CorpusEntry] = {}
    for name, entry in data.items():
        try:
            corpus[str(name)] = CorpusEntry.model_validate(entry)
        except ValidationError as e:
            raise ClassifierError(
                f"Invalid license corpus entry '{name}': {e.error_count()} error(s)"
            ) from e
    return corpus


def default_corpus_archive() -> bytes:
    """Read the license corpus bundled with the package."""
    return (
        resources.files("golicense_analyzer.licenses")
        .joinpath(CORPUS_RESOURCE)
        .read_bytes()
    )


async def fetch_corpus_archive(
    url: str,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """Download a corpus archive.

    Args:
        url: Location of the archive.
        timeout: Deadline for the request in seconds.
        client: Optional httpx.AsyncClient to use. If not provided,
            a new client will be created.

    Returns:
        Raw archive bytes.

    Raises:
        NetworkError: If the download fails.
    """

    async def do_fetch(c: httpx.AsyncClient) -> bytes:
        try:
            response = await c.get(url, timeout=httpx.Timeout(timeout))
            response.raise_for_status()
            return response.content
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Failed to fetch license corpus {url}: "
                f"HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Failed to fetch license corpus {url}: {e}") from e

    if client:
        return await do_fetch(client)

    async with httpx.AsyncClient(follow_redirects=True) as new_client:
        return await do_fetch(new_client)


class Classifier:
    """Identifies licenses by comparing text with a corpus.

    Instances are read-only after construction and may be shared between
    threads.
    """

    def __init__(
        self,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        corpus: Optional[dict[str, CorpusEntry]] = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            confidence_threshold: Minimum confidence (0-1) for a match.
            corpus: Known licenses. Defaults to the bundled corpus.

        Raises:
            ClassifierError: If the threshold is out of range or the corpus
                is empty.
        """
        if not 0.0 <= confidence_threshold <= 1.0:
            raise ClassifierError(
                f"Confidence threshold must be between 0 and 1, "
                f"got {confidence_threshold}"
            )
        if corpus is None:
            corpus = load_corpus(default_corpus_archive())
        if not corpus:
            raise ClassifierError("License corpus is empty")

        self._threshold = confidence_threshold
        self._types = {name: entry.type for name, entry in corpus.items()}
        self._templates = {
            name: _shingles(_normalize_license_text(entry.text))
            for name, entry in corpus.items()
        }

    @classmethod
    def from_corpus_source(
        cls,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        source: CorpusSource = default_corpus_archive,
    ) -> Classifier:
        """Build a classifier from a corpus archive source.

        Raises:
            ClassifierError: If the archive cannot be read or parsed.
        """
        try:
            archive = source()
        except OSError as e:
            raise ClassifierError(f"Unable to read license corpus: {e}") from e
        return cls(confidence_threshold, load_corpus(archive))

    @property
    def confidence_threshold(self) -> float:
        """Minimum confidence for a match."""
        return self._threshold

    @property
    def license_names(self) -> list[str]:
        """Names of all licenses in the corpus."""
        return sorted(self._templates)

    def score(self, text: str) -> tuple[Optional[str], float]:
        """Find the closest license for a text.

        Confidence is the share of a license's shingles found in the text.
        Among licenses at or above the threshold, the one matching the most
        shingles of the text wins, so a license that is nearly a subset of
        another (BSD-2-Clause inside BSD-3-Clause) cannot shadow it. When no
        license reaches the threshold the highest confidence is reported.

        Args:
            text: License text to match.

        Returns:
            Tuple of (license_name, confidence). The name is None when the
            text shares nothing with any corpus entry.
        """
        candidate = _shingles(_normalize_license_text(text))
        if not candidate:
            return (None, 0.0)

        best_match: Optional[tuple[tuple[int, float], str]] = None
        closest: Optional[tuple[tuple[float, int], str]] = None
        for name, template in self._templates.items():
            if not template:
                continue
            matched = len(template & candidate)
            if not matched:
                continue
            confidence = round(matched / len(template), 6)
            if confidence >= self._threshold:
                key = (matched, confidence)
                if best_match is None or key > best_match[0]:
                    best_match = (key, name)
            nearest = (confidence, len(template))
            if closest is None or nearest > closest[0]:
                closest = (nearest, name)

        if best_match is not None:
            (_, confidence), name = best_match
            return (name, confidence)
        if closest is not None:
            (confidence, _), name = closest
            return (name, confidence)
        return (None, 0.0)

    def identify_text(self, text: str) -> tuple[str, LicenseType]:
        """Identify the license in a text.

        Raises:
            ClassificationError: If no license matches with enough confidence.
        """
        name, confidence = self.score(text)
        if name is None or confidence < self._threshold:
            raise ClassificationError(
                f"unknown license (best match {name or 'none'} "
                f"at {confidence:.0%}, threshold {self._threshold:.0%})"
            )
        return (name, self._types[name])

    def identify(self, license_path: Path | str) -> tuple[str, LicenseType]:
        """Identify the license in a file.

        Args:
            license_path: Path of the license file.

        Returns:
            Tuple of (license_name, license_type).

        Raises:
            ClassificationError: If the file cannot be read or no license
                matches with enough confidence.
        """
        path = Path(license_path)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ClassificationError(f"Cannot read license file '{path}': {e}") from e
        try:
            return self.identify_text(text)
        except ClassificationError as e:
            raise ClassificationError(f"{path}: {e}") from e
