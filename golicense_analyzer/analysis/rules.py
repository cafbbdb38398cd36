"""License rule evaluation."""
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from golicense_analyzer.exceptions import RuleError
from golicense_analyzer.models.config import AnalyzerConfig
from golicense_analyzer.models.policy import (
    AllowPolicy,
    DenyPolicy,
    Evaluation,
    Policy,
    RuleAction,
)
from golicense_analyzer.models.scan import LicenseResult


class Rules:
    """An allow or deny policy plus libraries exempt from it.

    Patterns are case-sensitive regular expressions searched anywhere in the
    classified license name. An empty license name (no license found) is
    matched against the patterns like any other name.
    """

    def __init__(self, policy: Policy, ignore: Iterable[str] = ()) -> None:
        """Initialize rules.

        Args:
            policy: Allow or deny policy.
            ignore: Library names excluded from evaluation.

        Raises:
            RuleError: If a pattern is not a valid regular expression.
        """
        self.policy = policy
        self.ignore = frozenset(ignore)
        compiled = []
        for pattern in policy.patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise RuleError(f"Invalid license pattern {pattern!r}: {e}") from e
        self._patterns = compiled

    @property
    def action(self) -> RuleAction:
        """Action applied to matching licenses."""
        return RuleAction(self.policy.kind)

    @property
    def patterns(self) -> list[str]:
        """Configured patterns, in configuration order."""
        return list(self.policy.patterns)

    def matches(self, license_name: str) -> bool:
        """Check whether a license name matches any pattern."""
        return any(p.search(license_name) for p in self._patterns)

    def is_violation(self, result: LicenseResult) -> bool:
        """Check whether a single (non-ignored) result breaks the rules."""
        matched = self.matches(result.license)
        if isinstance(self.policy, AllowPolicy):
            return not matched
        return matched

    def evaluate(self, results: Sequence[LicenseResult]) -> Evaluation:
        """Evaluate license results against the rules.

        Args:
            results: Results to check.

        Returns:
            Evaluation whose violations keep the order of ``results``.
        """
        violations: list[LicenseResult] = []
        ignored: list[str] = []
        for result in results:
            if result.library in self.ignore:
                ignored.append(result.library)
                continue
            if self.is_violation(result):
                violations.append(result)
        return Evaluation(
            passed=not violations,
            violations=violations,
            ignored=ignored,
        )

    def describe(self) -> str:
        """Human-readable summary of the rules."""
        lines = [f"{self.action.value}: {', '.join(self.patterns) or '(none)'}"]
        if self.ignore:
            lines.append(f"ignore: {', '.join(sorted(self.ignore))}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Rules(action={self.action.value!r}, patterns={self.patterns!r}, "
            f"ignore={sorted(self.ignore)!r})"
        )


def new_rules(
    action: RuleAction,
    patterns: Sequence[str],
    *ignore: str,
) -> Rules:
    """Build rules from an action and its patterns.

    Raises:
        RuleError: If a pattern is invalid.
    """
    policy: Policy
    if action == RuleAction.ALLOW:
        policy = AllowPolicy(patterns=list(patterns))
    else:
        policy = DenyPolicy(patterns=list(patterns))
    return Rules(policy, ignore)


def rules_from_config(config: AnalyzerConfig) -> Optional[Rules]:
    """Build rules from configuration, or None if no policy is configured.

    Raises:
        RuleError: If a pattern is invalid.
    """
    policy = config.policy()
    if policy is None:
        return None
    return Rules(policy, config.ignore_packages or ())
