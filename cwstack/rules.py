"""Counterweight rules and the rule table a stack consults on ``pop``.

A rule says: when ``main`` sits on top of the stack, any element deep-equal to
one of ``counterweights`` may remove it. The table is captured once, at
construction, and never changes afterwards.

Lookup is a linear scan in the caller's original order. If two rules have
deep-equal ``main`` values, the first one wins and the later one is shadowed.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .equality import Comparator, deep_equal, is_identity_only, slot_names

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CounterweightRule(Generic[T]):
    """A main element and the elements that may counterweight it."""

    main: T
    counterweights: list[T] = field(default_factory=list)


def _shared_objects(root: object) -> dict[int, object]:
    """Identity-only objects reachable from ``root``, keyed by id.

    Seeded into the deepcopy memo so sentinels and opaque handles are kept by
    reference: a copy of an identity-only object could never match it again.
    """
    shared: dict[int, object] = {}
    seen: set[int] = set()
    todo = [root]
    while todo:
        obj = todo.pop()
        if id(obj) in seen or isinstance(obj, (str, bytes, int, float)):
            continue
        seen.add(id(obj))
        if is_identity_only(obj):
            shared[id(obj)] = obj
            continue
        match obj:
            case Mapping():
                todo.extend(obj.keys())
                todo.extend(obj.values())
            case list() | tuple() | set() | frozenset():
                todo.extend(obj)
            case _:
                todo.extend(getattr(obj, "__dict__", {}).values())
                todo.extend(
                    getattr(obj, name)
                    for name in slot_names(type(obj))
                    if hasattr(obj, name)
                )
    return shared


def copy_rules(rules: list[CounterweightRule[T]]) -> list[CounterweightRule[T]]:
    """Deep copy of a rule list that keeps identity-only objects shared.

    Raises whatever ``copy.deepcopy`` raises for values it cannot copy.
    """
    return copy.deepcopy(rules, memo=_shared_objects(rules))


class RuleTable(Generic[T]):
    """An ordered, private copy of a rule set.

    The caller's rules are deep-copied so that later mutation of the original
    rule objects (or of their counterweight lists) has no effect. Some values
    cannot be deep-copied (objects whose ``__deepcopy__`` or pickling support
    refuses); in that case the
    table keeps a shallow copy of the rule list, logs a warning, and reports
    ``is_isolated == False``. The rule objects are then shared with the caller.
    """

    def __init__(
        self,
        rules: Iterable[CounterweightRule[T]],
        *,
        eq: Comparator[T] = deep_equal,
    ) -> None:
        self._eq = eq
        rules = list(rules)
        try:
            self._rules: list[CounterweightRule[T]] = copy_rules(rules)
            self._isolated = True
        except Exception as e:
            logger.warning(
                "Deep copy of %d counterweight rules failed (%s: %s); "
                "using a shallow copy. Do not mutate the rules externally.",
                len(rules),
                type(e).__name__,
                e,
            )
            self._rules = rules
            self._isolated = False

    @property
    def is_isolated(self) -> bool:
        """False when construction fell back to a shallow copy."""
        return self._isolated

    def find_counterweights(self, main: T) -> Sequence[T] | None:
        """Counterweights of the first rule whose main is deep-equal to ``main``.

        Returns None when no rule matches. A matching rule with an empty list
        returns that empty list.
        """
        for rule in self._rules:
            if self._eq(rule.main, main):
                return rule.counterweights
        return None

    def accepts(self, main: T, attempt: T) -> bool:
        """True if ``attempt`` is a registered counterweight for ``main``."""
        counterweights = self.find_counterweights(main)
        if counterweights is None:
            return False
        return any(self._eq(cw, attempt) for cw in counterweights)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[CounterweightRule[T]]:
        return iter(self._rules)
