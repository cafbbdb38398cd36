"""License rule evaluation."""

from golicense_analyzer.analysis.rules import Rules, new_rules, rules_from_config

__all__ = ["Rules", "new_rules", "rules_from_config"]
