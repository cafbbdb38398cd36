"""Configuration Pydantic models for golicense-analyzer."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from golicense_analyzer.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_GIT_REMOTES,
)
from golicense_analyzer.models.policy import AllowPolicy, DenyPolicy, RuleAction


class AnalyzerConfig(BaseModel):
    """Configuration for golicense-analyzer.

    Keys may be written with dashes or with their alternative names
    (``permit`` for ``allow``, ``forbid`` for ``deny``).
    """

    model_config = {"extra": "forbid"}

    allow: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("allow", "permit"),
        description="License name patterns that are allowed. "
        "Mutually exclusive with deny.",
    )
    deny: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("deny", "forbid"),
        description="License name patterns that are forbidden. "
        "Mutually exclusive with allow.",
    )
    ignore_packages: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("ignore_packages", "ignore-packages"),
        description="Library names excluded from rule evaluation.",
    )
    git_remotes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_GIT_REMOTES),
        validation_alias=AliasChoices("git_remotes", "git-remotes"),
        description="Git remotes tried, in order, to build license URLs.",
    )
    confidence_threshold: float = Field(
        default=DEFAULT_CONFIDENCE_THRESHOLD,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("confidence_threshold", "confidence-threshold"),
        description="Minimum classifier confidence for a license match.",
    )
    license_file_patterns: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("license_file_patterns", "license-file-patterns"),
        description="Case-insensitive regexes for license file names.",
    )
    corpus_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("corpus_url", "corpus-url"),
        description="URL of an alternative license corpus archive.",
    )
    format: Optional[str] = Field(
        default=None,
        description="Default output format.",
    )
    template_file: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("template_file", "template-file"),
        description="Jinja2 template used by the template output format.",
    )

    @field_validator(
        "allow",
        "deny",
        "ignore_packages",
        "git_remotes",
        "license_file_patterns",
        mode="before",
    )
    @classmethod
    def _single_string_as_list(cls, value: Any) -> Any:
        """Allow a single string wherever a list of strings is expected."""
        if isinstance(value, str):
            return [value]
        return value

    @model_validator(mode="after")
    def _check_rules_exclusive(self) -> AnalyzerConfig:
        if self.allow and self.deny:
            raise ValueError(
                "'deny'/'forbid' and 'allow'/'permit' options are mutually exclusive"
            )
        return self

    @property
    def action(self) -> Optional[RuleAction]:
        """Rule action implied by the configured patterns, if any."""
        if self.allow:
            return RuleAction.ALLOW
        if self.deny:
            return RuleAction.DENY
        return None

    def policy(self) -> Optional[AllowPolicy | DenyPolicy]:
        """Build the configured policy, or None if no rules are set."""
        if self.allow:
            return AllowPolicy(patterns=list(self.allow))
        if self.deny:
            return DenyPolicy(patterns=list(self.deny))
        return None
