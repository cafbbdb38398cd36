"""Library model: packages grouped by the license file that covers them."""
from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


def common_ancestor(paths: list[str]) -> str:
    """Compute the longest common ``/``-delimited prefix of import paths.

    Paths are sorted by their segments, after which the prefix shared by the
    first and last entries is the prefix shared by the whole set.

    Args:
        paths: Import paths to compare.

    Returns:
        The shared prefix without a trailing slash. A single path is returned
        verbatim; paths with no segment in common yield an empty string.
    """
    if not paths:
        return ""
    if len(paths) == 1:
        return paths[0]

    ordered = sorted(paths, key=lambda p: p.split("/"))
    first, last = ordered[0].split("/"), ordered[-1].split("/")

    common: list[str] = []
    for left, right in zip(first, last):
        if left != right:
            break
        common.append(left)
    return "/".join(common)


class Library(BaseModel):
    """A collection of packages covered by the same license file.

    An empty license path means no license file was found; such libraries
    always hold exactly one package.
    """

    model_config = {"extra": "forbid"}

    license_path: str = Field(
        default="",
        description="Path of the file containing the library's license",
    )
    packages: list[str] = Field(
        default_factory=list,
        description="Import paths of the packages in this library",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        """Common import path prefix of all packages in the library."""
        return common_ancestor(self.packages)

    @property
    def has_license(self) -> bool:
        """True if a license file covers this library."""
        return self.license_path != ""

    def __str__(self) -> str:
        return self.name
