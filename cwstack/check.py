"""Lint a rule set before handing it to a stack.

The stack accepts any rule list and never complains; this module is where
suspicious rule sets get reported. All problems are collected as diagnostics,
nothing is raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .equality import Comparator, deep_equal
from .rules import CounterweightRule, copy_rules


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    rule_index: int | None
    message: str


@dataclass(frozen=True)
class CheckResult:
    rule_count: int
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def is_well_formed(self) -> bool:
        return len(self.errors) == 0


@dataclass
class CheckContext:
    rule_index: int | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, check: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.ERROR, self.rule_index, message)
        )

    def warning(self, check: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.WARNING, self.rule_index, message)
        )


def check_rules(
    rules: Iterable[Any],
    *,
    eq: Comparator[Any] = deep_equal,
) -> CheckResult:
    rules = list(rules)
    ctx = CheckContext()

    well_shaped: list[tuple[int, CounterweightRule[Any]]] = []
    for i, r in enumerate(rules):
        ctx.rule_index = i
        if _check_shape(ctx, r):
            well_shaped.append((i, r))

    for pos, (i, r) in enumerate(well_shaped):
        ctx.rule_index = i
        _check_shadowed(ctx, r, well_shaped[:pos], eq)
        _check_counterweights(ctx, r, eq)

    ctx.rule_index = None
    _check_copyable(ctx, rules)

    return CheckResult(rule_count=len(rules), diagnostics=tuple(ctx.diagnostics))


def _check_shape(ctx: CheckContext, r: Any) -> bool:
    match r:
        case CounterweightRule(counterweights=list() | tuple()):
            return True
        case CounterweightRule(counterweights=cws):
            ctx.error(
                "rule_shape",
                f"counterweights must be a list or tuple, got {type(cws).__name__}",
            )
        case _:
            ctx.error(
                "rule_shape",
                f"expected CounterweightRule, got {type(r).__name__}",
            )
    return False


def _check_shadowed(
    ctx: CheckContext,
    r: CounterweightRule[Any],
    earlier: list[tuple[int, CounterweightRule[Any]]],
    eq: Comparator[Any],
) -> None:
    for j, prev in earlier:
        if eq(prev.main, r.main):
            ctx.warning(
                "shadowed_rule",
                f"main {r.main!r} already governed by rule {j}; this rule is never used",
            )
            return


def _check_counterweights(
    ctx: CheckContext, r: CounterweightRule[Any], eq: Comparator[Any]
) -> None:
    if not r.counterweights:
        ctx.warning(
            "no_counterweights",
            f"main {r.main!r} has no counterweights and can never be popped",
        )
        return

    for k, cw in enumerate(r.counterweights):
        if any(eq(prev, cw) for prev in r.counterweights[:k]):
            ctx.warning(
                "duplicate_counterweight",
                f"counterweight {cw!r} listed more than once for main {r.main!r}",
            )


def _check_copyable(ctx: CheckContext, rules: list[Any]) -> None:
    try:
        copy_rules(rules)
    except Exception as e:
        ctx.warning(
            "copyable",
            f"rules cannot be deep-copied ({type(e).__name__}); "
            "a stack built from them shares rule objects with the caller",
        )
