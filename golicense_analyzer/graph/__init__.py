"""Package graph providers."""

from golicense_analyzer.graph.base import PackageGraphProvider
from golicense_analyzer.graph.golist import GoListProvider
from golicense_analyzer.graph.static import StaticGraphProvider

__all__ = [
    "GoListProvider",
    "PackageGraphProvider",
    "StaticGraphProvider",
]
