"""Browsable URLs for license files.

URLs are derived without network access: from the remotes of the git
working tree that contains the file or, failing that, from the library's
import path.
"""
from __future__ import annotations

import configparser
import logging
import posixpath
import re
from pathlib import Path
from typing import NamedTuple, Sequence
from urllib.parse import urlsplit

from git import Repo
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

from golicense_analyzer.exceptions import AggregateError, LicenseURLError
from golicense_analyzer.models.library import Library

logger = logging.getLogger(__name__)

# Path segment that precedes a file path in each host's web UI
# TODO: use the module version instead of "master" once versions are tracked
REPO_PATH_PREFIXES = {
    "github.com": "blob/master/",
    "bitbucket.org": "src/master/",
    "gitlab.com": "-/blob/master/",
    "go.googlesource.com": "+/refs/heads/master/",
}

# git@github.com:user/project.git
_SCP_LIKE_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


class RemoteInfo(NamedTuple):
    """Repository coordinates parsed from a remote URL."""

    host: str
    user: str
    project: str


def parse_remote_url(remote_url: str) -> RemoteInfo:
    """Parse a git remote URL into host, user and project.

    Accepts ``https://``, ``ssh://`` and ``git://`` URLs as well as the
    scp-like ``git@host:user/project.git`` form. Everything between the host
    and the last path segment is treated as the user (or group) part.

    Raises:
        LicenseURLError: If the URL cannot be parsed.
    """
    url = remote_url.strip()
    if "://" in url:
        parts = urlsplit(url)
        host, path = parts.hostname or "", parts.path
    else:
        match = _SCP_LIKE_RE.match(url)
        if not match:
            raise LicenseURLError(f"unsupported git remote URL {remote_url!r}")
        host, path = match.group("host"), match.group("path")

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    if not host or not path:
        raise LicenseURLError(f"unsupported git remote URL {remote_url!r}")

    user, _, project = path.rpartition("/")
    return RemoteInfo(host=host.lower(), user=user, project=project)


def _build_url(host: str, user: str, project: str, prefix: str, file_path: str) -> str:
    segments = [s.strip("/") for s in (user, project, prefix, file_path) if s]
    return f"https://{host}/" + posixpath.normpath("/".join(segments))


class GitRepo:
    """A git working tree containing license files."""

    def __init__(self, repo: Repo) -> None:
        self._repo = repo

    @property
    def working_dir(self) -> Path:
        """Root directory of the working tree."""
        return Path(self._repo.working_tree_dir or self._repo.working_dir)

    def file_url(self, file_path: Path | str, remote: str) -> str:
        """Build the URL of a file as shown by the host of a remote.

        Args:
            file_path: File inside this working tree.
            remote: Name of the git remote to use.

        Returns:
            Browsable URL of the file.

        Raises:
            LicenseURLError: If the remote is missing, its URL cannot be
                read or parsed, or its host is not supported.
        """
        try:
            relative = Path(file_path).resolve().relative_to(self.working_dir.resolve())
        except ValueError as e:
            raise LicenseURLError(
                f"{file_path} is not inside git repository {self.working_dir}"
            ) from e

        try:
            git_remote = self._repo.remote(remote)
        except ValueError as e:
            raise LicenseURLError(
                f"git remote {remote!r} not found in {self.working_dir}"
            ) from e
        # A remote section without a url key surfaces as AttributeError
        try:
            remote_url = git_remote.url
        except (AttributeError, GitError, configparser.Error) as e:
            raise LicenseURLError(
                f"git remote {remote!r} has no readable url in {self.working_dir}"
            ) from e

        info = parse_remote_url(remote_url)
        prefix = REPO_PATH_PREFIXES.get(info.host)
        if prefix is None:
            raise LicenseURLError(
                f"unsupported git host {info.host!r} for remote {remote!r}"
            )
        return _build_url(info.host, info.user, info.project, prefix, relative.as_posix())


def find_git_repo(file_path: Path | str) -> GitRepo:
    """Find the git working tree that contains a file.

    Raises:
        LicenseURLError: If the file is not inside a git working tree.
    """
    directory = Path(file_path).parent
    try:
        return GitRepo(Repo(directory, search_parent_directories=True))
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise LicenseURLError(f"{file_path} is not inside a git repository") from e


def library_file_url(library: Library, file_path: Path | str) -> str:
    """Derive the URL of a library file from the library name.

    Only works for import paths of the form ``host/user/project[/subpath]``
    on a supported host.

    Raises:
        LicenseURLError: If the name is too short or the host is unsupported.
    """
    name = library.name
    relative = posixpath.relpath(
        Path(file_path).as_posix(),
        Path(library.license_path).parent.as_posix(),
    )
    parts = name.split("/", 3)
    if len(parts) < 3:
        raise LicenseURLError(f"cannot determine URL for {name!r} package")

    host, user, project = parts[0], parts[1], parts[2]
    prefix = REPO_PATH_PREFIXES.get(host)
    if prefix is None:
        raise LicenseURLError(f"unsupported package host {host!r} for {name!r}")
    if len(parts) == 4:
        prefix = posixpath.join(prefix, parts[3])
    return _build_url(host, user, project, prefix, relative)


def find_license_url(library: Library, remotes: Sequence[str]) -> str:
    """Resolve the browsable URL of a library's license file.

    Remotes of the enclosing git repository are tried in order and the first
    one that yields a URL wins. When the license file is not in a git
    repository (e.g. a module cache), the URL is derived from the library
    name instead.

    Args:
        library: Library with a license file.
        remotes: Git remote names to try, in order.

    Returns:
        URL of the license file.

    Raises:
        LicenseURLError: If the library has no license file, or the URL
            cannot be derived from its name.
        AggregateError: If every remote failed; holds one error per remote.
    """
    if not library.has_license:
        raise LicenseURLError(f"{library.name} has no license file")

    try:
        repo = find_git_repo(library.license_path)
    except LicenseURLError:
        return library_file_url(library, library.license_path)

    errors = AggregateError()
    for remote in remotes:
        try:
            url = repo.file_url(library.license_path, remote)
        except LicenseURLError as e:
            errors.append(e)
            continue
        if errors:
            logger.debug("Resolved %s via remote %r after: %s", library.name, remote, errors)
        return url

    errors.append(LicenseURLError("failed to find license URL"))
    raise errors
