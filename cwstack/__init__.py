"""cwstack: a LIFO stack whose pops must be justified by counterweight rules."""

from .equality import Comparator, deep_equal
from .rules import CounterweightRule, RuleTable
from .stack import CounterweightStack, PopRejected, RejectReason
from .check import CheckResult, Diagnostic, Severity, check_rules
from .helpers import pairs, rule, rule_list
from .result import Ok, Err, Result, unwrap_or

__all__ = [
    # Equality
    "Comparator", "deep_equal",
    # Rules
    "CounterweightRule", "RuleTable",
    # Stack
    "CounterweightStack", "PopRejected", "RejectReason",
    # Check
    "CheckResult", "Diagnostic", "Severity", "check_rules",
    # Helpers
    "pairs", "rule", "rule_list",
    # Result
    "Ok", "Err", "Result", "unwrap_or",
]
