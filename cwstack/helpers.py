"""Builder helpers for writing rule sets.

These are the primary public API for authoring rules, both inline and in
rule files loaded by ``cwstack check`` / ``cwstack replay``.
"""

from collections.abc import Iterable
from typing import TypeVar

from cwstack.rules import CounterweightRule

T = TypeVar("T")


def rule(main: T, *counterweights: T) -> CounterweightRule[T]:
    return CounterweightRule(main=main, counterweights=list(counterweights))


def rule_list(entries: Iterable[tuple[T, Iterable[T]]]) -> list[CounterweightRule[T]]:
    """Build a rule list from ``(main, counterweights)`` pairs, keeping order."""
    return [CounterweightRule(main=m, counterweights=list(cws)) for m, cws in entries]


def pairs(opening: str, closing: str) -> list[CounterweightRule[str]]:
    """Character-pair rules, e.g. ``pairs("([{", ")]}")``."""
    if len(opening) != len(closing):
        raise ValueError(
            f"pairs() needs equal-length strings, got {len(opening)} and {len(closing)}"
        )
    return [rule(o, c) for o, c in zip(opening, closing)]
