"""Pydantic data models for golicense-analyzer."""

from golicense_analyzer.models.config import AnalyzerConfig
from golicense_analyzer.models.dependency import DependencyNode, DependencyTree
from golicense_analyzer.models.library import Library, common_ancestor
from golicense_analyzer.models.package import PackageGraph, PackageNode
from golicense_analyzer.models.policy import (
    AllowPolicy,
    DenyPolicy,
    Evaluation,
    Policy,
    RuleAction,
)
from golicense_analyzer.models.report import LicenseReport
from golicense_analyzer.models.scan import LicenseResult, Verbosity

__all__ = [
    "AllowPolicy",
    "AnalyzerConfig",
    "DenyPolicy",
    "DependencyNode",
    "DependencyTree",
    "Evaluation",
    "Library",
    "LicenseReport",
    "LicenseResult",
    "PackageGraph",
    "PackageNode",
    "Policy",
    "RuleAction",
    "Verbosity",
    "common_ancestor",
]
