"""Rule-gated LIFO stack.

``push`` is unconditional. ``pop`` takes a counterweight attempt and removes
the top element only if the rule table registers the attempt as a
counterweight for that element. Nothing here raises: every rejected pop
leaves the stack unchanged and reports failure through its return value.

Example:
    rules = [
        CounterweightRule("begin", ["end", "end."]),
        CounterweightRule("if", ["then"]),
    ]
    s = CounterweightStack(rules)
    s.push("begin"); s.push("if")
    s.pop("begin")   # None, "if" is on top
    s.pop("then")    # "if"
    s.pop("end")     # "begin"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Generic, TypeVar

from .equality import Comparator, deep_equal
from .result import Err, Ok, Result, unwrap_or
from .rules import CounterweightRule, RuleTable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RejectReason(Enum):
    """Why a conditional pop did not remove anything."""

    EMPTY = "empty"                              # nothing on the stack
    NO_RULE = "no_rule"                          # top element is not a main element
    NOT_A_COUNTERWEIGHT = "not_a_counterweight"  # attempt not in the matched rule


class PopRejected(Exception):
    """Returned (not raised) inside ``Err`` by :meth:`CounterweightStack.try_pop`."""

    def __init__(self, reason: RejectReason, top: object = None) -> None:
        super().__init__(f"pop rejected: {reason.value}")
        self.reason = reason
        self.top = top


class CounterweightStack(Generic[T]):
    """A stack whose pop must be justified by a counterweight element.

    ``None`` doubles as the "absent" result of :meth:`pop` and :meth:`peek`.
    Callers that push ``None`` as an element should use :meth:`try_pop` and
    :meth:`is_empty` to tell the two apart.
    """

    def __init__(
        self,
        rules: Iterable[CounterweightRule[T]],
        *,
        eq: Comparator[T] = deep_equal,
    ) -> None:
        self._eq = eq
        self._rules: RuleTable[T] = RuleTable(rules, eq=eq)
        self._items: list[T] = []

    def push(self, item: T) -> None:
        self._items.append(item)

    def try_pop(self, counterweight_attempt: T) -> Result[T, PopRejected]:
        """Pop the top element if ``counterweight_attempt`` counterweights it.

        Returns ``Ok(top)`` after removing it, or ``Err(PopRejected)`` naming
        the reason, with the stack untouched.
        """
        if not self._items:
            return self._reject(RejectReason.EMPTY, None, counterweight_attempt)

        top = self._items[-1]
        counterweights = self._rules.find_counterweights(top)
        if counterweights is None:
            return self._reject(RejectReason.NO_RULE, top, counterweight_attempt)
        if not any(self._eq(cw, counterweight_attempt) for cw in counterweights):
            return self._reject(
                RejectReason.NOT_A_COUNTERWEIGHT, top, counterweight_attempt
            )

        return Ok(self._items.pop())

    def pop(self, counterweight_attempt: T) -> T | None:
        """Pop the top element, or return None if the pop is not justified."""
        return unwrap_or(self.try_pop(counterweight_attempt), None)

    def can_pop(self, counterweight_attempt: T) -> bool:
        """True if ``pop(counterweight_attempt)`` would succeed right now."""
        if not self._items:
            return False
        return self._rules.accepts(self._items[-1], counterweight_attempt)

    def peek(self) -> T | None:
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        """Remove every element. The rules stay in force."""
        self._items = []

    def compare_top(self, item: T) -> bool:
        """True if the stack is non-empty and its top is deep-equal to ``item``."""
        if not self._items:
            return False
        return self._eq(self._items[-1], item)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self._items)}, "
            f"top={self.peek()!r}, rules={len(self._rules)})"
        )

    def _reject(
        self, reason: RejectReason, top: T | None, attempt: T
    ) -> Err[PopRejected]:
        logger.debug("pop(%r) rejected (%s), top=%r", attempt, reason.value, top)
        return Err(PopRejected(reason, top))
