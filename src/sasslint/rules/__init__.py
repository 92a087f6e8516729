"""Lint rules built on the analysis engine."""

from sasslint.rules.options import InvalidOptionError
from sasslint.rules.registry import ALL_RULES, RULES_BY_ID, RuleDefinition, get_rule

__all__ = ["ALL_RULES", "RULES_BY_ID", "InvalidOptionError", "RuleDefinition", "get_rule"]
