"""Policy-related Pydantic models for golicense-analyzer."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from golicense_analyzer.models.scan import LicenseResult


class RuleAction(Enum):
    """What a rule does with licenses that match its patterns."""

    ALLOW = "allow"
    DENY = "deny"


class AllowPolicy(BaseModel):
    """Only licenses matching one of the patterns are accepted."""

    model_config = {"extra": "forbid", "frozen": True}

    kind: Literal["allow"] = "allow"
    patterns: list[str] = Field(
        default_factory=list,
        description="Regular expressions searched in the license name",
    )


class DenyPolicy(BaseModel):
    """Licenses matching any of the patterns are rejected."""

    model_config = {"extra": "forbid", "frozen": True}

    kind: Literal["deny"] = "deny"
    patterns: list[str] = Field(
        default_factory=list,
        description="Regular expressions searched in the license name",
    )


Policy = Annotated[Union[AllowPolicy, DenyPolicy], Field(discriminator="kind")]


class Evaluation(BaseModel):
    """Outcome of evaluating license results against rules."""

    model_config = {"extra": "forbid"}

    passed: bool = Field(description="True if no result violated the rules")
    violations: list[LicenseResult] = Field(
        default_factory=list,
        description="Offending results, in input order",
    )
    ignored: list[str] = Field(
        default_factory=list,
        description="Library names skipped because they are ignored",
    )
